"""Relay fixtures: a fake host memory and helpers to drive it like a running game."""

import pytest

from MultiworldRelay.relay_identity import SessionIdentity
from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_modes import GAME_MODE_TITLE
from MultiworldRelay.relay_plugin import MultiworldRelayPlugin
from MultiworldRelay.relay_registry import SeedRegistry
from MultiworldRelay.relay_settings import RelaySettings

from Tests.relay.utils.fake_memory import FakeMemory

ADDR = AddressMap()
MODE_OVERWORLD = 0x09
SEED = 424242


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def set_mode(memory: FakeMemory, code: int) -> None:
    memory.write_u8(ADDR.game_mode, code)


def set_title(memory: FakeMemory) -> None:
    set_mode(memory, GAME_MODE_TITLE)


def press_send(memory: FakeMemory, item: int, target: int) -> None:
    memory.write_u8(ADDR.outgoing_item, item)
    memory.write_u8(ADDR.outgoing_target, target)


def flip_sram(memory: FakeMemory, offset: int, mask: int) -> None:
    addr = ADDR.sram_start + offset
    memory.write_u8(addr, memory.read_u8(addr) ^ mask)


def make_plugin(
    registry: SeedRegistry,
    player: int,
    seed: int = SEED,
    settings: RelaySettings | None = None,
    **kwargs,
) -> tuple[MultiworldRelayPlugin, FakeMemory]:
    memory = FakeMemory()
    set_mode(memory, MODE_OVERWORLD)
    plugin = MultiworldRelayPlugin(registry, memory, settings=settings, **kwargs)
    plugin.on_game_load(SessionIdentity(seed=seed, player=player))
    return plugin, memory


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def memory() -> FakeMemory:
    mem = FakeMemory()
    set_mode(mem, MODE_OVERWORLD)
    return mem


@pytest.fixture
def registry() -> SeedRegistry:
    return SeedRegistry()
