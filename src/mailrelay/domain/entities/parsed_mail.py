from __future__ import annotations
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

@dataclass(frozen=True)
class MailContent:
    text: Optional[str] = None
    html: Optional[str] = None

@dataclass
class ParsedMail:
    id: str
    message_id: Optional[str]
    sender: Optional[str]
    recipient: Optional[str]
    subject: Optional[str]
    text: Optional[str] = None
    html: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ParsedMail":
        return cls(
            id=data["id"],
            message_id=data.get("message_id"),
            sender=data.get("sender"),
            recipient=data.get("recipient"),
            subject=data.get("subject"),
            text=data.get("text"),
            html=data.get("html"),
        )
