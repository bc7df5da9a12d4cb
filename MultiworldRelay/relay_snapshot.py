from __future__ import annotations

from itertools import zip_longest

from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_memory import RelayMemory

DIFF_TOKEN_SEPARATOR = ";"


def capture_snapshot(memory: RelayMemory, addresses: AddressMap) -> bytes:
    return bytes(memory.read_byte_range(addresses.sram_start, addresses.sram_size))


def diff_snapshots(prev: bytes | None, curr: bytes) -> str:
    """
    Serialize the byte-level changes between two snapshots.

    Each changed byte becomes an ``offset:mask`` token, where offset is relative
    to the start of the region and mask is ``prev ^ curr``. Tokens are ordered by
    offset so the same pair of snapshots always yields the same string. This
    walks the whole region; only call it while a send is waiting to be confirmed.
    If the region size changed between captures, bytes past the end of the
    shorter snapshot compare against zero.
    """
    if prev is None:
        return ""
    changes: list[tuple[int, int]] = []
    for offset, (old, new) in enumerate(zip_longest(prev, curr, fillvalue=0)):
        mask = old ^ new
        if mask:
            changes.append((offset, mask))
    changes.sort()
    return DIFF_TOKEN_SEPARATOR.join(f"{offset:04x}:{mask:02x}" for offset, mask in changes)
