from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Any


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@dataclass(frozen=True, slots=True)
class CandidateEvent:
    item: int
    source: int
    target: int

    def to_dict(self) -> dict[str, int]:
        return {"item": int(self.item), "source": int(self.source), "target": int(self.target)}

    @classmethod
    def from_dict(cls, data: Any) -> "CandidateEvent | None":
        if not isinstance(data, dict):
            return None
        target = _safe_int(data.get("target"), 0)
        if target <= 0:
            return None
        return cls(
            item=max(0, _safe_int(data.get("item"), 0)),
            source=max(0, _safe_int(data.get("source"), 0)),
            target=target,
        )


@dataclass(frozen=True, slots=True)
class ConfirmedEvent:
    """A candidate stamped with the state diff that proved it happened.

    Equality covers all four fields, so two confirmations of the same send
    against the same diff collapse into one mailbox entry.
    """

    item: int
    source: int
    target: int
    fingerprint: str

    @classmethod
    def from_candidate(cls, candidate: CandidateEvent, fingerprint: str) -> "ConfirmedEvent":
        return cls(
            item=candidate.item,
            source=candidate.source,
            target=candidate.target,
            fingerprint=str(fingerprint),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "item": int(self.item),
            "source": int(self.source),
            "target": int(self.target),
            "fingerprint": self.fingerprint,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "ConfirmedEvent | None":
        if not isinstance(data, dict):
            return None
        fingerprint = str(data.get("fingerprint", "") or "")
        target = _safe_int(data.get("target"), 0)
        if not fingerprint or target <= 0:
            return None
        return cls(
            item=max(0, _safe_int(data.get("item"), 0)),
            source=max(0, _safe_int(data.get("source"), 0)),
            target=target,
            fingerprint=fingerprint,
        )


@dataclass(slots=True)
class PlayerState:
    mailbox: list[ConfirmedEvent] = field(default_factory=list)
    pending: list[CandidateEvent] = field(default_factory=list)
    clear_delay: int = 0
    clear_armed: bool = False
    prev_outgoing_target: int = 0
    prev_snapshot: bytes | None = None
