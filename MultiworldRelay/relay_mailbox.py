from __future__ import annotations

from dataclasses import dataclass

from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_memory import RelayMemory
from MultiworldRelay.relay_models import ConfirmedEvent


@dataclass(slots=True)
class DrainResult:
    delivered: ConfirmedEvent | None = None
    healed: bool = False
    recv_count: int = 0


def append_unique(mailbox: list[ConfirmedEvent], event: ConfirmedEvent) -> bool:
    for existing in mailbox:
        if existing == event:
            return False
    mailbox.append(event)
    return True


def recv_count_after_overrun(mailbox_length: int) -> int:
    """
    Value written back when the game reports more received items than were queued.

    Resetting to zero makes the game receive the whole mailbox again from the
    first entry. Returning ``mailbox_length`` would resume after the last queued
    item instead.
    """
    return 0


def is_recv_count_overrun(recv_count: int, mailbox_length: int) -> bool:
    return int(recv_count) > int(mailbox_length)


def drain_mailbox(
    memory: RelayMemory,
    addresses: AddressMap,
    mailbox: list[ConfirmedEvent],
) -> DrainResult:
    """Hand the next undelivered event to the game if its incoming slot is free.

    ``recv_count`` on the result is the counter as read from the game, before
    any write this call made.
    """
    queue_len = len(mailbox)
    recv_count = int(memory.read_u16_le(addresses.recv_count))
    result = DrainResult(recv_count=recv_count)

    if is_recv_count_overrun(recv_count, queue_len):
        memory.write_u16_le(addresses.recv_count, recv_count_after_overrun(queue_len))
        result.healed = True
        return result

    if recv_count < queue_len and int(memory.read_u8(addresses.incoming_item)) == 0:
        event = mailbox[recv_count]
        memory.write_u8(addresses.incoming_item, int(event.item) & 0xFF)
        memory.write_u8(addresses.incoming_player, int(event.source) & 0xFF)
        memory.write_u16_le(addresses.recv_count, recv_count + 1)
        result.delivered = event

    return result
