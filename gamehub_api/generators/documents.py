"""Response envelope shared by every generated document."""

from __future__ import annotations

import time
from typing import Any


class GenerationError(Exception):
    """Raised when a document cannot be generated from the registry."""

    def __init__(self, document: str, reason: str) -> None:
        self.document = document
        self.reason = reason
        super().__init__(f"{document}: {reason}")


def get_timestamp() -> str:
    """Current Unix time in whole seconds, as a decimal string."""
    return str(int(time.time()))


def success(data: Any, timestamp: str | None = None, *, timed: bool = False) -> dict:
    """Wrap *data* as ``{code, msg, data[, time]}``.

    Timed documents without an explicit timestamp get the current time;
    a build run passes one timestamp to all of them.
    """
    doc: dict[str, Any] = {
        "code": 200,
        "msg": "Success",
        "data": data,
    }
    if timed:
        doc["time"] = timestamp or get_timestamp()
    return doc
