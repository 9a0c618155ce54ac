"""Data models for TODO items."""

from dataclasses import dataclass, field
from typing import List

# Prefix lets the receiving side filter TODO mails.
SUBJECT_PREFIX = "todo: "


@dataclass
class TodoItem:
    """Represents one TODO captured at the terminal."""
    text: str          # space-joined command-line words
    subject: str = ""  # "todo: " + text
    lines: List[str] = field(default_factory=list)  # extra details, in entry order

    def __post_init__(self):
        if not self.subject:
            self.subject = SUBJECT_PREFIX + self.text

    @property
    def body(self) -> str:
        """Plain-text body: the subject alone, or the item text plus its details."""
        if not self.lines:
            return self.subject
        return "\n".join([self.text] + self.lines)


@dataclass(frozen=True)
class OutboundMessage:
    """Represents the composed email handed to the delivery sender."""
    subject: str
    body: str
    recipient: str
