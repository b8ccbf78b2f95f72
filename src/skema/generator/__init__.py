"""Client generation — validate controllers, project shapes, emit schemas.

Usage::

    from skema.config import load_config
    from skema.generator import generate

    result = await generate(load_config("."), routes, linting=False)
    print(result.summary())
"""

from skema.generator.pipeline import (
    GenerateOptions,
    GenerateResult,
    Generator,
    RouteSkip,
    generate,
)

__all__ = [
    "GenerateOptions",
    "GenerateResult",
    "Generator",
    "RouteSkip",
    "generate",
]
