from __future__ import annotations

from dataclasses import dataclass

from MultiworldRelay.relay_mailbox import append_unique
from MultiworldRelay.relay_models import CandidateEvent
from MultiworldRelay.relay_models import ConfirmedEvent
from MultiworldRelay.relay_models import PlayerState
from MultiworldRelay.relay_registry import Session
from MultiworldRelay.relay_snapshot import diff_snapshots


@dataclass(slots=True)
class ConfirmResult:
    event: ConfirmedEvent
    appended: bool


def discard_pending(state: PlayerState) -> list[CandidateEvent]:
    """Drop every unconfirmed send. Never drops only part of the queue."""
    dropped = list(state.pending)
    state.pending.clear()
    return dropped


def confirm_pending(
    session: Session,
    state: PlayerState,
    current_snapshot: bytes,
) -> ConfirmResult | None:
    """
    Match the oldest queued send to a change in the tracked state region.

    One state change can only account for one send, so at most one candidate is
    confirmed per call. The diff runs only while something is queued. The
    caller stores ``current_snapshot`` as the previous snapshot afterwards,
    whatever this returns.
    """
    if not state.pending:
        return None

    changes = diff_snapshots(state.prev_snapshot, current_snapshot)
    if not changes:
        return None

    candidate = state.pending.pop(0)
    event = ConfirmedEvent.from_candidate(candidate, changes)
    target_state = session.player(event.target)
    appended = append_unique(target_state.mailbox, event)
    return ConfirmResult(event=event, appended=appended)
