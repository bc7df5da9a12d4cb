from __future__ import annotations

from dataclasses import dataclass

from MultiworldRelay.relay_memory import RomReader

ROM_NAME_ADDR = 0x7FC0
ROM_NAME_READ_SIZE = 0x60
MIN_CART_ROM_SIZE = 0x200000

# "ER" + protocol + "_" + team + "_" + player + "_" + seed
ROM_NAME_PATTERN: tuple[int | None, ...] = (0x45, 0x52, None, None, None, 0x5F, None, 0x5F, None, 0x5F)

FIELD_DELIMITER = 0x5F
SEED_TERMINATOR = 0x00
MAX_FIELD_DIGITS = 20


@dataclass(frozen=True, slots=True)
class SessionIdentity:
    seed: int
    player: int
    team: int = 0
    protocol: int = 0


def matches_rom_name_pattern(rom_header: bytes) -> bool:
    if len(rom_header) < len(ROM_NAME_PATTERN):
        return False
    for idx, expected in enumerate(ROM_NAME_PATTERN):
        if expected is not None and rom_header[idx] != expected:
            return False
    return True


def read_decimal_field(data: bytes, offset: int, stop: int) -> tuple[int, int]:
    """Read ASCII digits from *offset* up to *stop*; return (value, offset after stop)."""
    result = 0
    pos = int(offset)
    for _ in range(MAX_FIELD_DIGITS):
        if pos >= len(data):
            break
        value = data[pos]
        if value == stop:
            break
        result = result * 10 + (value - 0x30)
        pos += 1
    return result, pos + 1


def identify_session(rom_header: bytes, rom_size: int) -> SessionIdentity | None:
    if int(rom_size) < MIN_CART_ROM_SIZE:
        return None
    header = bytes(rom_header or b"")
    if not matches_rom_name_pattern(header):
        return None

    offset = 2
    protocol, offset = read_decimal_field(header, offset, FIELD_DELIMITER)
    team, offset = read_decimal_field(header, offset, FIELD_DELIMITER)
    player, offset = read_decimal_field(header, offset, FIELD_DELIMITER)
    seed, _ = read_decimal_field(header, offset, SEED_TERMINATOR)
    return SessionIdentity(seed=seed, player=player, team=team, protocol=protocol)


def read_session_identity(rom: RomReader) -> SessionIdentity | None:
    size = int(rom.rom_size())
    if size < MIN_CART_ROM_SIZE:
        return None
    length = min(ROM_NAME_READ_SIZE, size - ROM_NAME_ADDR)
    return identify_session(rom.read_rom_range(ROM_NAME_ADDR, length), size)
