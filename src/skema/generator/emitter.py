"""Schema emission — render one client module per route group.

Each group becomes ``<output>/<group>/schema.py``::

    class UsersShowRouteInput(TypedDict):
        params: UsersShowRouteParams


    class UsersShowRouteParams(TypedDict):
        id: int


    class UsersShowRouteOutput(TypedDict):
        id: int
        name: str


    # source: ../../app/controllers/users/show_controller.py
    UsersShowRoute = RouteIO[UsersShowRouteInput, UsersShowRouteOutput, UsersShowRouteParams]

    routes: Final = {
        "USERS_SHOW": register(UsersShowRoute, form=False, path="/users/{{ id }}", method="GET"),
    }

Rendering is a pure function of the parsed routes, so an unchanged route
table always produces byte-identical files.
"""

import os
from collections.abc import Sequence
from pathlib import Path

from skema.generator.destination import REFERENCE_FILE, write_artifact
from skema.generator.templates import (
    GENERATED_HEADER,
    GROUP_INIT_PY,
    PACKAGE_INIT_PY,
    REFERENCE_PY,
    ROUTE_ENTRY,
    ROUTES_BLOCK,
    SCHEMA_PY,
)
from skema.routing.route import ParsedRoute

# Typing names every schema module imports, in import order
_TYPING_ORDER = ("Any", "Final", "Literal", "NotRequired", "TypedDict")


def relative_posix(start: Path, target: Path) -> str:
    """Relative path from *start* to *target* with forward slashes."""
    return Path(os.path.relpath(target, start)).as_posix()


def render_schema(routes: Sequence[ParsedRoute]) -> str:
    """Render the ``schema.py`` source for one group's accepted routes."""
    typing_names = {"Final"}
    sections: list[str] = []
    aliases: list[str] = []
    entries: list[str] = []

    for route in routes:
        shapes = route.shapes
        if shapes is not None:
            typing_names.update(shapes.typing_names)
            sections.extend(decl.render() for decl in shapes.declarations)
            alias = shapes.io_alias(route.name.type)
        else:
            alias = f"{route.name.type} = RouteIO[None, None, None]\n"
        aliases.append(f"# source: {route.controller.relative}\n{alias}")
        entries.append(
            ROUTE_ENTRY.format(
                key=route.name.key,
                type=route.name.type,
                form=route.form,
                path=route.path,
                method=route.method,
            )
        )

    if aliases:
        sections.append("\n".join(aliases))
    sections.append(ROUTES_BLOCK.format(entries="".join(entries)))

    return SCHEMA_PY.format(
        header=GENERATED_HEADER,
        typing_imports=", ".join(n for n in _TYPING_ORDER if n in typing_names),
        body="\n\n".join(sections),
    )


def write_group(output_dir: Path, group: str, routes: Sequence[ParsedRoute]) -> list[Path]:
    """Write ``<group>/schema.py`` and ``<group>/__init__.py``. Returns the written paths."""
    written = [
        write_artifact(output_dir, f"{group}/schema.py", render_schema(routes)),
        write_artifact(output_dir, f"{group}/__init__.py", GROUP_INIT_PY.format(header=GENERATED_HEADER)),
    ]
    return [path for path in written if path is not None]


def write_package_init(output_dir: Path) -> Path | None:
    """Write the client package's top-level ``__init__.py``."""
    return write_artifact(output_dir, "__init__.py", PACKAGE_INIT_PY.format(header=GENERATED_HEADER))


def write_reference(output_dir: Path, project_root: Path) -> Path | None:
    """Create ``reference.py`` unless it already exists."""
    project = relative_posix(output_dir, project_root / "pyproject.toml")
    return write_artifact(output_dir, REFERENCE_FILE, REFERENCE_PY.format(project=project))
