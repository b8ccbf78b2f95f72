"""Route naming — stable key and type identifiers from path and handler file.

The phrase is built from the pattern's static segments followed by the
controller file's words, de-duplicated in first-occurrence order::

    "/users/:id" + "show_user_controller.py"
        -> phrase "users show user"
        -> RouteName(key="USERS_SHOW_USER", type="UsersShowUserRoute")
"""

import re
from pathlib import PurePosixPath

from skema.errors import NamingError
from skema.routing.route import RouteName

_CONTROLLER_SUFFIX = "_controller"

_PATTERN_SPLIT = re.compile(r"[./-]+")

# Word boundaries: "postId" -> post Id, "HTMLPage" -> HTML Page
_WORDS = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z0-9]+|[A-Z]+|[0-9]+")


def _words(text: str) -> list[str]:
    return _WORDS.findall(text)


def snake_case(text: str) -> str:
    """``"postId"`` -> ``"post_id"``, ``"Hello World"`` -> ``"hello_world"``."""
    return "_".join(word.lower() for word in _words(text))


def pascal_case(text: str) -> str:
    """``"users show"`` -> ``"UsersShow"``."""
    return "".join(word[:1].upper() + word[1:].lower() for word in _words(text))


def controller_words(path: str) -> list[str]:
    """Split a controller file name into words, dropping the ``_controller`` suffix.

    Raises ``NamingError`` when the file stem does not end in ``_controller``.
    """
    name = PurePosixPath(path.replace("\\", "/")).name
    if not name:
        msg = "Unable to determine the controller file name"
        raise NamingError(msg, path=path)

    stem = name.removesuffix(".py")
    if not stem.endswith(_CONTROLLER_SUFFIX) or stem == _CONTROLLER_SUFFIX:
        msg = f'The controller file name must end with "{_CONTROLLER_SUFFIX}.py": {name!r}'
        raise NamingError(msg, path=path)

    return stem.removesuffix(_CONTROLLER_SUFFIX).split("_")


def name_route(pattern: str, controller_path: str) -> RouteName:
    """Derive the ``RouteName`` for a route. Pure and deterministic."""
    tokens = [
        segment
        for segment in _PATTERN_SPLIT.split(pattern)
        if segment and not segment.startswith(":")
    ]
    tokens.extend(controller_words(controller_path))

    phrase_words: list[str] = []
    for token in tokens:
        word = snake_case(token)
        if word and word not in phrase_words:
            phrase_words.append(word)
    phrase = " ".join(phrase_words)

    return RouteName(
        key=snake_case(phrase).upper(),
        type=f"{pascal_case(phrase)}Route",
    )
