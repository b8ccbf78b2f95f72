"""Route pattern parsing, template rewriting, and method resolution.

Patterns use ``:name`` parameter markers.  Emitted templates use
mustache-style placeholders::

    "/users/:id/posts/:postId" -> "/users/{{ id }}/posts/{{ postId }}"
"""

import re
from collections.abc import Iterable

from skema.errors import PathShapeError
from skema.routing.route import PathSegment

_PARAM_SEGMENT = re.compile(r"^:[a-zA-Z]+$")
_STATIC_SEGMENT = re.compile(r"^[a-z0-9-]+$", re.IGNORECASE)

# Router-native {id} or {id:int}, rewritten to :id
_BRACE_PARAM = re.compile(r"\{([^}:]+)(?::[^}]*)?\}")


def normalize_pattern(path: str) -> str:
    """Rewrite ``{name}`` / ``{name:type}`` segments to ``:name`` markers."""
    return _BRACE_PARAM.sub(lambda m: f":{m.group(1)}", path)


def parse_path(pattern: str) -> list[PathSegment]:
    """Parse and validate a route pattern into segments.

    Examples::

        "/"              -> []
        "/users"         -> [PathSegment("users")]
        "/users/:id"     -> [PathSegment("users"), PathSegment(":id", is_param=True, ...)]

    Raises ``PathShapeError`` for parameter names that are not letters
    only and for static segments outside ``[a-z0-9-]``.
    """
    if pattern == "/":
        return []

    segments: list[PathSegment] = []
    for index, part in enumerate(pattern.split("/")[1:]):
        if part.startswith(":"):
            if not _PARAM_SEGMENT.match(part):
                msg = "Only letters are allowed in parameter segments"
                raise PathShapeError(msg, pattern=pattern, segment=index)
            segments.append(PathSegment(value=part, is_param=True, param_name=part[1:]))
        else:
            if not _STATIC_SEGMENT.match(part):
                msg = "Only lowercase letters, numbers and hyphens are allowed in static segments"
                raise PathShapeError(msg, pattern=pattern, segment=index)
            segments.append(PathSegment(value=part))
    return segments


def to_template(pattern: str) -> str:
    """Validate *pattern* and rewrite its parameters as ``{{ name }}`` placeholders."""
    parts = [
        f"{{{{ {seg.param_name} }}}}" if seg.is_param else seg.value
        for seg in parse_path(pattern)
    ]
    return "/" + "/".join(parts)


def resolve_method(methods: Iterable[str]) -> str:
    """Pick the single canonical verb for a route.

    Defaults to ``GET``; ``HEAD`` is ignored; the last other method wins::

        ["GET", "HEAD"]  -> "GET"
        ["POST", "HEAD"] -> "POST"
        ["GET", "POST"]  -> "POST"
    """
    result = "GET"
    for method in methods:
        if method.lower() == "head":
            continue
        result = method.upper()
    return result
