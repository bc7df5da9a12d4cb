from __future__ import annotations

import logging
from enum import Enum

LOGGER_ROOT = "MultiworldRelay"


class MessageType(Enum):
    Info = logging.INFO
    Warning = logging.WARNING
    Error = logging.ERROR
    Debug = logging.DEBUG


def get_logger(sender: str) -> logging.Logger:
    name = str(sender or "").strip()
    if not name:
        return logging.getLogger(LOGGER_ROOT)
    return logging.getLogger(f"{LOGGER_ROOT}.{name}")


def ConsoleLog(sender: str, message: str, message_type: MessageType = MessageType.Info) -> None:
    """Log *message* under the tag *sender*, mirroring the host console's call shape."""
    get_logger(sender).log(message_type.value, "[%s] %s", sender, message)
