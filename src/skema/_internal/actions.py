"""Timed pipeline steps.

Every generation step is an *action*: started when created, then closed as
succeeded, skipped, or failed with its elapsed time::

    action = start_action(logger, "Writing group 'api'")
    ...
    action.succeeded()   # "Writing group 'api' ... done (1.4ms)"
"""

import logging
import time


class Action:
    """One timed step, logged on completion."""

    __slots__ = ("_logger", "_name", "_started")

    def __init__(self, logger: logging.Logger, name: str) -> None:
        self._logger = logger
        self._name = name
        self._started = time.perf_counter()

    @property
    def name(self) -> str:
        return self._name

    def elapsed(self) -> str:
        ms = (time.perf_counter() - self._started) * 1000
        return f"{ms:.1f}ms" if ms < 1000 else f"{ms / 1000:.2f}s"

    def succeeded(self) -> None:
        self._logger.info("%s ... done (%s)", self._name, self.elapsed())

    def skipped(self, reason: str) -> None:
        self._logger.warning("%s ... skipped: %s (%s)", self._name, reason, self.elapsed())

    def failed(self, reason: str = "") -> None:
        suffix = f": {reason}" if reason else ""
        self._logger.error("%s ... failed%s (%s)", self._name, suffix, self.elapsed())


def start_action(logger: logging.Logger, name: str) -> Action:
    return Action(logger, name)
