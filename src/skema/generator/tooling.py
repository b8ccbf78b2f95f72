"""External tooling — formatter, type-checker, and linter subprocesses.

Commands run one at a time through ``anyio.run_process``.  A non-zero exit
surfaces the captured output through the ``skema.tooling`` logger and
raises ``ToolingError``; there is no retry.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import anyio

from skema._internal.actions import start_action
from skema.errors import ToolingError

logger = logging.getLogger("skema.tooling")


@dataclass(frozen=True, slots=True)
class ToolCommand:
    """A named external command. Inactive commands are not run."""

    name: str
    argv: tuple[str, ...]
    active: bool = True


async def run_tool(command: ToolCommand, *, cwd: Path) -> bool:
    """Run *command* in *cwd*. Returns ``False`` if it was inactive.

    Raises ``ToolingError`` when the process exits non-zero or cannot start.
    """
    if not command.active or not command.argv:
        return False

    action = start_action(logger, command.name)
    try:
        result = await anyio.run_process(list(command.argv), cwd=cwd, check=False)
    except OSError as exc:
        action.failed(str(exc))
        raise ToolingError(command.name, 127, stderr=str(exc)) from exc

    if result.returncode != 0:
        stdout = result.stdout.decode("utf-8", errors="replace")
        stderr = result.stderr.decode("utf-8", errors="replace")
        for line in stdout.splitlines():
            logger.info(line)
        for line in stderr.splitlines():
            logger.error(line)
        action.failed()
        raise ToolingError(command.name, result.returncode, stdout=stdout, stderr=stderr)

    action.succeeded()
    return True


async def run_tools(commands: list[ToolCommand], *, cwd: Path) -> None:
    """Run *commands* sequentially, stopping at the first failure."""
    for command in commands:
        await run_tool(command, cwd=cwd)
