"""Generated-source templates — plain Python strings for the client package.

Simple ``str.format()`` substitution, no template engine.  Literal braces
in the output are doubled.
"""

GENERATED_HEADER = """\
# This is an auto-generated file. Changes made to this file will be lost.
# Run `skema generate` to update it.
"""

SCHEMA_PY = """\
{header}
from __future__ import annotations

from typing import {typing_imports}

from skema.runtime import RouteIO, register

from ..reference import *  # noqa: F403


{body}"""

ROUTES_BLOCK = """\
routes: Final = {{
{entries}}}
"""

ROUTE_ENTRY = (
    '    "{key}": register({type}, form={form}, path="{path}", method="{method}"),\n'
)

GROUP_INIT_PY = """\
{header}
from .schema import routes

__all__ = ["routes"]
"""

PACKAGE_INIT_PY = """\
{header}"""

REFERENCE_PY = """\
\"\"\"Shared types for the generated route schemas.

Every ``<group>/schema.py`` module star-imports this file, so names
defined here are visible to all of them.  This file is created once and
never overwritten.

Project: {project}
\"\"\"

# Add the required types here
"""
