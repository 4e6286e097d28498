'''
See COPYRIGHT.md for copyright information.

Message logging for taxonomy loading and generation.

Messages are logged to the "amsfsurvey" logger with a message code and named arguments,
so handlers such as LogToBufferHandler can report them structurally.
'''
from __future__ import annotations

import logging
from typing import Any

logger = logging.getLogger("amsfsurvey")

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def log(level: str, code: str, msg: str, artifact: str | None = None, **args: Any) -> None:
    """Logs msg, composed from %(name)s named arguments in args, under the message code.

    :param level: one of DEBUG, INFO, WARNING or ERROR
    :param code: message code, such as amsfsurvey:dimensionLocatorSkipped
    :param artifact: path of the taxonomy artifact the message refers to, if any
    """
    numericLevel = LEVELS[level]
    if not logger.isEnabledFor(numericLevel):
        return
    extra = {"messageCode": code, "refs": [{"href": artifact}] if artifact else []}
    if args:
        # a single mapping argument is used by the logging system for %(name)s replacement
        logger.log(numericLevel, msg, args, extra=extra)
    else:
        logger.log(numericLevel, msg, extra=extra)


def debug(code: str, msg: str, **args: Any) -> None:
    log("DEBUG", code, msg, **args)


def info(code: str, msg: str, **args: Any) -> None:
    log("INFO", code, msg, **args)


def warning(code: str, msg: str, **args: Any) -> None:
    log("WARNING", code, msg, **args)
