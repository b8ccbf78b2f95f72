"""Runtime helpers imported by generated client modules.

Pure and stateless: nothing here touches the generator, the filesystem,
or the network.
"""

from skema.runtime.interpolation import interpolate, placeholders
from skema.runtime.registrar import RouteDescriptor, register
from skema.runtime.types import Controller, RouteIO

__all__ = [
    "Controller",
    "RouteDescriptor",
    "RouteIO",
    "interpolate",
    "placeholders",
    "register",
]
