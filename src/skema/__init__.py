"""Skema — typed client bindings generated from a web server's route table.

Generation (``skema generate myapp.routes:routes``) validates every route's
controller and writes one client module per route group.  Generated
modules use the runtime helpers from ``skema.runtime``, re-exported here::

    from client.api import routes

    descriptor = routes["USERS_SHOW"]
    descriptor.method                # "GET"
    descriptor.path({"id": 42})      # "/users/42"

Configuration lives in ``[tool.skema]`` or is built in code::

    from skema import define_config

    skema = define_config(groups={"api": "/api/"})
"""

__version__ = "0.1.0"
__all__ = [
    "ConfigurationError",
    "Controller",
    "HandlerRef",
    "MissingParameterError",
    "RouteDescriptor",
    "RouteIO",
    "RouteRecord",
    "SkemaConfig",
    "SkemaError",
    "define_config",
    "interpolate",
    "register",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import skema`` (and every generated client module) fast: the
    runtime helpers never pull in the generator.
    """
    if name in ("Controller", "RouteDescriptor", "RouteIO", "interpolate", "register"):
        from skema import runtime as _runtime

        return getattr(_runtime, name)

    if name in ("SkemaConfig", "define_config"):
        from skema import config as _config

        return getattr(_config, name)

    if name in ("HandlerRef", "RouteRecord"):
        from skema.routing import route as _route

        return getattr(_route, name)

    if name in ("SkemaError", "ConfigurationError", "MissingParameterError"):
        from skema import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
