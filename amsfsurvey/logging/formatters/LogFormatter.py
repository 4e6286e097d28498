"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import logging
from typing import Any


class LogFormatter(logging.Formatter):
    def __init__(self, fmt: str | None = None, datefmt: str | None = None) -> None:
        super(LogFormatter, self).__init__(fmt or "[%(messageCode)s] %(message)s - %(file)s", datefmt)

    def fileLines(self, record: logging.LogRecord) -> str:
        # provide a file parameter made up from refs entries
        return logRefsFiles(getattr(record, "refs", []))

    def format(self, record: logging.LogRecord) -> str:
        record.file = self.fileLines(record)
        if not hasattr(record, "messageCode"):
            record.messageCode = ""
        try:
            formattedMessage = super(LogFormatter, self).format(record)
        except (KeyError, TypeError, ValueError) as ex:
            formattedMessage = "Message: "
            if getattr(record, "messageCode", ""):
                formattedMessage += "[{0}] ".format(getattr(record, "messageCode", ""))
            if getattr(record, "msg", ""):
                formattedMessage += str(record.msg) + " "
            formattedMessage += " \nMessage log error: " + str(ex)
        if hasattr(record, "file"):
            delattr(record, "file")
        return formattedMessage


def logRefsFiles(refs: list[dict[str, Any]]) -> str:
    return ", ".join(sorted({ref["href"] for ref in refs if ref.get("href")}))
