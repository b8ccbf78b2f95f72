"""Generator configuration.

SkemaConfig is a frozen dataclass — immutable after creation, validated
once at load time.  Build it with ``define_config()`` or load it from the
``[tool.skema]`` table of the host project's ``pyproject.toml``::

    [tool.skema]
    output = "client"

    [tool.skema.groups]
    api = "/api/"
    admin = "/admin/"
"""

import re
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any

from skema.errors import ConfigurationError

_GROUP_KEY = re.compile(r"^[a-z0-9_]+$")
_GROUP_PATTERN = re.compile(r"^/(?:[a-z0-9-]+/)+$")

# Tool tables that may be overridden from pyproject.toml
_COMMAND_FIELDS = ("formatter", "typechecker", "linter", "post_formatter")


@dataclass(frozen=True, slots=True)
class SkemaConfig:
    """Generator configuration. Immutable after creation.

    ``groups`` keeps declaration order — group matching is first-match
    in that order.  The ``post_formatter`` command gets the output
    directory appended as its last argument.
    """

    groups: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    output: str = "client"
    root: Path = field(default_factory=Path.cwd)

    # External tooling (run from ``root``)
    formatter: tuple[str, ...] = ("ruff", "format", ".")
    typechecker: tuple[str, ...] = ("mypy", ".")
    linter: tuple[str, ...] = ("ruff", "check", ".")
    post_formatter: tuple[str, ...] = ("ruff", "format")

    @property
    def output_dir(self) -> Path:
        """Absolute path of the generated client package."""
        return (self.root / self.output).resolve()


def validate_groups(groups: Mapping[str, str]) -> Mapping[str, str]:
    """Check every group key and prefix pattern, preserving order.

    Raises ``ConfigurationError`` naming the first offending key or value.
    """
    for key, value in groups.items():
        if not isinstance(value, str) or not _GROUP_PATTERN.match(value):
            msg = (
                f'Invalid group "{key}" value: "{value}". Only lowercase alphanumeric '
                "characters and hyphens are allowed, with leading and trailing slashes"
            )
            raise ConfigurationError(msg)
        if not _GROUP_KEY.match(key):
            msg = (
                f'Invalid group "{key}" name. Only lowercase alphanumeric '
                "characters and underscores are allowed"
            )
            raise ConfigurationError(msg)
    return MappingProxyType(dict(groups))


def validate_output(root: Path, output: str) -> str:
    """Check that *output* names a directory strictly inside *root*.

    The destination is cleared before every run, so it may never be the
    project root itself or anything outside it.
    """
    if not isinstance(output, str):
        msg = f'Invalid output {output!r}: expected a directory path string'
        raise ConfigurationError(msg)
    root = root.resolve()
    target = (root / output).resolve()
    if target == root or not target.is_relative_to(root):
        msg = (
            f'Invalid output "{output}". The output directory must be a subdirectory '
            f"of the project root {root}"
        )
        raise ConfigurationError(msg)
    return output


def define_config(
    *,
    groups: Mapping[str, str] | None = None,
    output: str = "client",
    root: str | Path | None = None,
    **commands: Any,
) -> SkemaConfig:
    """Validate and build a ``SkemaConfig``.

    Usage::

        skema = define_config(groups={"api": "/api/", "admin": "/admin/"})
    """
    unknown = set(commands) - set(_COMMAND_FIELDS)
    if unknown:
        msg = f"Unknown configuration option(s): {', '.join(sorted(unknown))}"
        raise ConfigurationError(msg)

    tools: dict[str, tuple[str, ...]] = {}
    for name, value in commands.items():
        if isinstance(value, str) or not all(isinstance(part, str) for part in value):
            msg = f'Invalid "{name}" command: expected a list of strings, got {value!r}'
            raise ConfigurationError(msg)
        tools[name] = tuple(value)

    root_dir = Path(root).resolve() if root is not None else Path.cwd()
    return SkemaConfig(
        groups=validate_groups(groups or {}),
        output=validate_output(root_dir, output),
        root=root_dir,
        **tools,
    )


def load_config(root: str | Path) -> SkemaConfig:
    """Load ``[tool.skema]`` from ``<root>/pyproject.toml``.

    Raises ``ConfigurationError`` if the file or the table is missing.
    """
    root = Path(root).resolve()
    pyproject = root / "pyproject.toml"
    if not pyproject.is_file():
        msg = f"No pyproject.toml found in {root}. Add a [tool.skema] table or pass --config"
        raise ConfigurationError(msg)

    with pyproject.open("rb") as fh:
        try:
            data = tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid {pyproject}: {exc}"
            raise ConfigurationError(msg) from exc

    table = data.get("tool", {}).get("skema")
    if not isinstance(table, dict):
        msg = f'Invalid "{pyproject}" file. Make sure it declares a [tool.skema] table'
        raise ConfigurationError(msg)

    options = dict(table)
    groups = options.pop("groups", {})
    if not isinstance(groups, dict):
        msg = '"[tool.skema] groups" must be a table of group name to path prefix'
        raise ConfigurationError(msg)
    output = options.pop("output", "client")
    return define_config(groups=groups, output=output, root=root, **options)
