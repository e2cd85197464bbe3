"""
Status line and transient message shown under the habit grid.
"""
from dataclasses import dataclass
from enum import Enum


class MessageKind(Enum):
    INFO = "info"
    ERROR = "error"


class Message:
    """Severity-tagged notice, replaced or cleared by each command outcome."""

    def __init__(self, text: str = "", kind: MessageKind = MessageKind.INFO):
        self.text = text
        self.kind = kind

    @classmethod
    def startup(cls) -> "Message":
        return cls("Type `add <habit-name>` to get started, `help` for commands")

    def set_message(self, text: str) -> None:
        self.text = text

    def set_kind(self, kind: MessageKind) -> None:
        self.kind = kind

    def info(self, text: str) -> None:
        self.kind = MessageKind.INFO
        self.text = text

    def error(self, text: str) -> None:
        self.kind = MessageKind.ERROR
        self.text = text

    def clear(self) -> None:
        self.text = ""
        self.kind = MessageKind.INFO

    def is_error(self) -> bool:
        return self.kind == MessageKind.ERROR

    def __str__(self) -> str:
        return self.text


@dataclass
class StatusLine:
    summary: str
    timestamp: str
