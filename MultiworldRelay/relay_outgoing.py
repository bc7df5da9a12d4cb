from __future__ import annotations

from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_memory import RelayMemory
from MultiworldRelay.relay_models import CandidateEvent
from MultiworldRelay.relay_models import PlayerState

DEFAULT_CLEAR_DELAY_FRAMES = 1


def detect_outgoing(
    memory: RelayMemory,
    addresses: AddressMap,
    state: PlayerState,
    player_id: int,
    clear_delay_frames: int = DEFAULT_CLEAR_DELAY_FRAMES,
) -> CandidateEvent | None:
    """Queue a send when the outgoing target goes from empty to set. Active ticks only."""
    target = int(memory.read_u8(addresses.outgoing_target))
    item = int(memory.read_u8(addresses.outgoing_item))

    prev_target = int(state.prev_outgoing_target)
    state.prev_outgoing_target = target
    if target == 0 or prev_target != 0:
        return None

    candidate = CandidateEvent(item=item, source=int(player_id), target=target)
    state.pending.append(candidate)
    state.clear_delay = max(0, int(clear_delay_frames))
    state.clear_armed = True
    # The game keeps writing the target while the send animation runs; zero it
    # so the same send is not seen as a second edge next tick.
    state.prev_outgoing_target = 0
    memory.write_u8(addresses.outgoing_target, 0)
    return candidate


def tick_clear_delay(memory: RelayMemory, addresses: AddressMap, state: PlayerState) -> bool:
    """Count the clear delay down; zero the outgoing fields on the tick after it runs out.

    Returns True on the tick the fields were cleared.
    """
    if state.clear_delay > 0:
        state.clear_delay -= 1
        return False
    if not state.clear_armed:
        return False
    memory.write_u8(addresses.outgoing_target, 0)
    memory.write_u8(addresses.outgoing_item, 0)
    state.clear_armed = False
    return True
