"""Path interpolation — fill ``{{ name }}`` placeholders at call time.

Pure function, no shared state::

    interpolate("/users/{{ id }}", {"id": 42})  # -> "/users/42"
"""

import re
from collections.abc import Mapping
from typing import Any

from skema.errors import MissingParameterError

_PLACEHOLDER = re.compile(r"\{\{\s*([A-Za-z_][A-Za-z0-9_]*)\s*\}\}")


def placeholders(template: str) -> list[str]:
    """Return the parameter names referenced by *template*, in order."""
    return _PLACEHOLDER.findall(template)


def interpolate(template: str, params: Mapping[str, Any] | None = None) -> str:
    """Replace every placeholder with ``str()`` of the matching parameter.

    Raises ``MissingParameterError`` if a placeholder has no parameter.
    Extra parameters are ignored.
    """
    values = params or {}

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in values:
            raise MissingParameterError(name, template)
        return str(values[name])

    return _PLACEHOLDER.sub(_replace, template)
