"""The generation pipeline — route table in, typed client package out.

Steps, strictly in sequence:

1. Prepare the destination directory
2. Partition the route table into groups
3. Run the pre-generation tooling (format, type-check, lint)
4. Write ``reference.py`` if absent
5. For each group, for each route: name it, validate its pattern, check
   collisions, validate its controller — then accept or skip it
6. Write each group's ``schema.py``
7. Format the output directory

Skips are collected in the result and logged; every other failure raises
and aborts the run before later groups are written.
"""

import importlib
import logging
from collections.abc import Sequence
from dataclasses import dataclass, field, replace
from pathlib import Path

from skema._internal.actions import start_action
from skema.config import SkemaConfig
from skema.errors import HandlerImportError
from skema.generator.controllers import ControllerSkip, inspect_controller, locate_module
from skema.generator.destination import prepare_destination
from skema.generator.emitter import relative_posix, write_group, write_package_init, write_reference
from skema.generator.ledger import RouteLedger
from skema.generator.shapes import project_shapes
from skema.generator.tooling import ToolCommand, run_tool, run_tools
from skema.routing.groups import group_routes
from skema.routing.naming import name_route
from skema.routing.paths import resolve_method, to_template
from skema.routing.route import ControllerRef, HandlerRef, ParsedRoute, RouteRecord

logger = logging.getLogger("skema.generate")


@dataclass(frozen=True, slots=True)
class RouteSkip:
    """A route left out of the generated client, and why."""

    pattern: str
    group: str
    reason: str


@dataclass(frozen=True, slots=True)
class GenerateOptions:
    """Which external tools to run around generation."""

    formatting: bool = True
    typechecking: bool = True
    linting: bool = True


@dataclass(slots=True)
class GenerateResult:
    """Result of a generation run."""

    groups: dict[str, list[ParsedRoute]] = field(default_factory=dict)
    skips: list[RouteSkip] = field(default_factory=list)
    files: list[Path] = field(default_factory=list)

    @property
    def routes(self) -> list[ParsedRoute]:
        return [route for routes in self.groups.values() for route in routes]

    def summary(self) -> str:
        """Human-readable summary."""
        lines = [
            f"Generated {len(self.routes)} route(s) in {len(self.groups)} group(s), "
            f"skipped {len(self.skips)}.",
        ]
        for group, routes in self.groups.items():
            lines.append(f"  {group}: {', '.join(r.name.key for r in routes) or '(empty)'}")
        for skip in self.skips:
            lines.append(f"  [SKIPPED] {skip.pattern} ({skip.group}): {skip.reason}")
        return "\n".join(lines)


class Generator:
    """Runs the pipeline for one configuration and route table.

    Usage::

        generator = Generator(config, routes, options=GenerateOptions(linting=False))
        result = await generator.run()
    """

    __slots__ = ("_config", "_ledger", "_options", "_routes")

    def __init__(
        self,
        config: SkemaConfig,
        routes: Sequence[RouteRecord],
        *,
        options: GenerateOptions | None = None,
    ) -> None:
        self._config = config
        self._routes = tuple(routes)
        self._options = options or GenerateOptions()
        self._ledger = RouteLedger()

    @property
    def output_dir(self) -> Path:
        return self._config.output_dir

    async def run(self) -> GenerateResult:
        """Run every step. Raises on the first fatal error."""
        config = self._config
        options = self._options
        output_dir = self.output_dir
        result = GenerateResult()
        self._ledger = RouteLedger()
        generating = start_action(logger, "Generating client")

        action = start_action(logger, "Preparing destination")
        prepare_destination(output_dir)
        action.succeeded()

        action = start_action(logger, "Getting routes")
        grouped = group_routes(self._routes, config.groups)
        action.succeeded()

        await run_tools(
            [
                ToolCommand("Formatting files", config.formatter, options.formatting),
                ToolCommand("Typechecking", config.typechecker, options.typechecking),
                ToolCommand("Linting", config.linter, options.linting),
            ],
            cwd=config.root,
        )

        action = start_action(logger, "Writing reference file")
        reference = write_reference(output_dir, config.root)
        if reference is not None:
            result.files.append(reference)
        package_init = write_package_init(output_dir)
        if package_init is not None:
            result.files.append(package_init)
        action.succeeded()

        parsing = start_action(logger, "Parsing routes")
        for group, records in grouped.items():
            accepted = self.parse_group(group, records, result.skips)
            result.groups[group] = accepted

            action = start_action(logger, f"Writing group {group!r}")
            result.files.extend(write_group(output_dir, group, accepted))
            action.succeeded()
        parsing.succeeded()

        post_format = config.post_formatter + (str(output_dir),) if config.post_formatter else ()
        await run_tool(
            ToolCommand("Formatting client files", post_format, options.formatting),
            cwd=config.root,
        )

        generating.succeeded()
        return result

    def parse_group(
        self,
        group: str,
        records: Sequence[RouteRecord],
        skips: list[RouteSkip],
    ) -> list[ParsedRoute]:
        """Accept or skip each route of *group*, in table order."""
        action = start_action(logger, f"Parsing group {group!r}")
        accepted: list[ParsedRoute] = []
        for record in records:
            outcome = self.parse_route(group, record)
            if isinstance(outcome, RouteSkip):
                skips.append(outcome)
                continue
            self._ledger.admit(outcome)
            accepted.append(outcome)
        action.succeeded()
        return accepted

    def parse_route(self, group: str, record: RouteRecord) -> ParsedRoute | RouteSkip:
        """Build the ``ParsedRoute`` for *record*, or explain why it is skipped.

        Naming, path-shape, collision, and handler import failures raise.
        """
        action = start_action(logger, f"Parsing route {record.pattern!r} in group {group!r}")

        def skip(reason: str) -> RouteSkip:
            action.skipped(reason)
            return RouteSkip(pattern=record.pattern, group=group, reason=reason)

        handler = record.handler
        if not isinstance(handler, HandlerRef):
            return skip("Function handlers are not supported")

        source_file = locate_module(handler.module)
        if source_file is None:
            return skip(f"Unable to find the handler module {handler.module!r}")

        name = name_route(record.pattern, str(source_file))
        draft = ParsedRoute(
            pattern=record.pattern,
            path=to_template(record.pattern),
            method=resolve_method(record.methods),
            form=False,
            controller=ControllerRef(
                path=handler.module,
                relative=relative_posix(self.output_dir / group, source_file),
            ),
            name=name,
        )
        self._ledger.check(draft)

        try:
            module = importlib.import_module(handler.module)
        except Exception as exc:
            msg = f"Unable to import the handler module: {exc}"
            raise HandlerImportError(msg, pattern=record.pattern, module=handler.module) from exc

        outcome = inspect_controller(module, handler.symbol)
        if isinstance(outcome, ControllerSkip):
            return skip(outcome.reason)

        action.succeeded()
        return replace(
            draft,
            form=outcome.form,
            shapes=project_shapes(draft.name.type, outcome.input, outcome.output),
        )


async def generate(
    config: SkemaConfig,
    routes: Sequence[RouteRecord],
    *,
    formatting: bool = True,
    typechecking: bool = True,
    linting: bool = True,
) -> GenerateResult:
    """Run the generation pipeline once."""
    options = GenerateOptions(formatting=formatting, typechecking=typechecking, linting=linting)
    return await Generator(config, routes, options=options).run()
