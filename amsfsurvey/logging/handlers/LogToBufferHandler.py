"""
See COPYRIGHT.md for copyright information.
"""
from __future__ import annotations

import json
import logging
from typing import Any, Mapping

from amsfsurvey.logging.formatters.LogFormatter import LogFormatter


class LogToBufferHandler(logging.Handler):
    """
    .. class:: LogToBufferHandler()

    A log handler that keeps log entries in a memory buffer for later retrieval as JSON or text lines,
    usually for an embedding application that reports taxonomy load diagnostics to its users.
    """
    logRecordBuffer: list[logging.LogRecord]

    def __init__(self, level: int = logging.NOTSET) -> None:
        super(LogToBufferHandler, self).__init__(level)
        self.logRecordBuffer = []
        self.setFormatter(LogFormatter())

    def emit(self, logRecord: logging.LogRecord) -> None:
        self.logRecordBuffer.append(logRecord)

    def flush(self) -> None:
        pass # records stay in the buffer until retrieved

    def clearLogBuffer(self) -> None:
        del self.logRecordBuffer[:]

    @property
    def messageCodes(self) -> list[str]:
        return [getattr(logRec, "messageCode", "") for logRec in self.logRecordBuffer]

    def recordToJson(self, logRec: logging.LogRecord) -> dict[str, Any]:
        message = { "text": logRec.getMessage() }
        if logRec.args and isinstance(logRec.args, Mapping):
            for n, v in logRec.args.items():
                message[n] = str(v)
        return {"code": getattr(logRec, "messageCode", ""),
                "level": logRec.levelname.lower(),
                "refs": getattr(logRec, "refs", []),
                "message": message}

    def getJson(self, clearLogBuffer: bool = True) -> str:
        """Returns a JSON string representing the messages in the log buffer, and optionally clears the buffer."""
        entries = [self.recordToJson(logRec) for logRec in self.logRecordBuffer]
        if clearLogBuffer:
            self.clearLogBuffer()
        return json.dumps({"log": entries}, ensure_ascii=False, indent=1, default=str)

    def getLines(self, clearLogBuffer: bool = True) -> list[str]:
        lines = [self.format(logRec) for logRec in self.logRecordBuffer]
        if clearLogBuffer:
            self.clearLogBuffer()
        return lines
