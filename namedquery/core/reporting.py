"""
Diagnostic sink: module logger plus the caller's optional ``reporter_fn``.

Emission is best-effort; a failing reporter never reaches the caller.
"""

import logging
from collections.abc import Callable

_log = logging.getLogger(__name__)

ReporterFn = Callable[[BaseException | None, str], None]


class Reporter:
    def __init__(self, reporter_fn: ReporterFn | None = None) -> None:
        self._fn = reporter_fn

    def __call__(self, err: BaseException | None, message: str) -> None:
        if err is not None:
            _log.debug("%s (error: %s)", message, err)
        else:
            _log.debug(message)
        if self._fn is None:
            return
        try:
            self._fn(err, message)
        except Exception as e:
            _log.debug("reporter_fn raised, ignoring: %s", e)
