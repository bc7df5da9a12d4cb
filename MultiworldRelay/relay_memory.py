from __future__ import annotations

from dataclasses import dataclass
from dataclasses import fields
from dataclasses import replace
from typing import Any
from typing import Protocol


class RelayMemory(Protocol):
    """Synchronous accessors the host exposes over the running game's work RAM."""

    def read_u8(self, addr: int) -> int: ...

    def write_u8(self, addr: int, value: int) -> None: ...

    def read_u16_le(self, addr: int) -> int: ...

    def write_u16_le(self, addr: int, value: int) -> None: ...

    def read_byte_range(self, base: int, length: int) -> bytes: ...


class RomReader(Protocol):
    """Optional cartridge ROM access, used only to identify the session."""

    def rom_size(self) -> int: ...

    def read_rom_range(self, base: int, length: int) -> bytes: ...


@dataclass(frozen=True, slots=True)
class AddressMap:
    game_mode: int = 0x0010
    outgoing_item: int = 0x02D8
    outgoing_target: int = 0xC098
    incoming_item: int = 0xF4D2
    incoming_player: int = 0xF4D3
    recv_count: int = 0xF4F0  # u16 le
    sram_start: int = 0xF000
    sram_size: int = 0x3E4

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]

    def with_overrides(self, overrides: dict[str, Any]) -> "AddressMap":
        known = set(self.field_names())
        values = {k: int(v) for k, v in (overrides or {}).items() if k in known}
        return replace(self, **values)
