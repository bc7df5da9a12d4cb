from __future__ import annotations

from enum import Enum


GAME_MODE_TITLE = 0x00
NORMAL_GAMEPLAY_MODES = frozenset(
    {
        0x07,  # dungeon
        0x09,  # overworld
        0x0B,  # special overworld
    }
)


class TickMode(Enum):
    Active = 0
    Reset = 1
    Other = 2


def classify_game_mode(code: int) -> TickMode:
    value = int(code) & 0xFF
    if value in NORMAL_GAMEPLAY_MODES:
        return TickMode.Active
    if value == GAME_MODE_TITLE:
        return TickMode.Reset
    return TickMode.Other
