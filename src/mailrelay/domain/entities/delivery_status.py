from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Mapping

@dataclass
class DeliveryStatus:
    # Grows only: addresses are appended, notified flips to True
    forwarded_to: list[str] = field(default_factory=list)
    notified: bool = False

    def has_forwarded(self, address: str) -> bool:
        return address in self.forwarded_to

    def mark_forwarded(self, address: str) -> None:
        if address not in self.forwarded_to:
            self.forwarded_to.append(address)

    def mark_notified(self) -> None:
        self.notified = True

    def to_dict(self) -> dict[str, Any]:
        return {"forwarded_to": list(self.forwarded_to), "notified": self.notified}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DeliveryStatus":
        forwarded = [str(x) for x in (data.get("forwarded_to") or [])]
        return cls(forwarded_to=forwarded, notified=bool(data.get("notified", False)))
