from __future__ import annotations

from MultiworldRelay.relay_models import PlayerState
from MultiworldRelay.relay_registry import SeedRegistry


def test_player_state_is_created_lazily_with_zeroed_fields():
    registry = SeedRegistry()
    assert registry.has_seed(7) is False

    state = registry.player(7, 3)
    assert registry.has_seed(7) is True
    assert state == PlayerState()
    assert state.mailbox == []
    assert state.pending == []
    assert state.clear_delay == 0
    assert state.prev_outgoing_target == 0
    assert state.prev_snapshot is None


def test_same_pair_returns_same_state():
    registry = SeedRegistry()
    first = registry.player(7, 3)
    first.clear_delay = 4
    assert registry.player(7, 3) is first
    assert registry.session(7).player(3) is first


def test_iter_players_is_sorted():
    registry = SeedRegistry()
    registry.player(9, 2)
    registry.player(1, 5)
    registry.player(9, 1)
    assert [(seed, player) for seed, player, _ in registry.iter_players()] == [(1, 5), (9, 1), (9, 2)]
    assert registry.seeds() == [1, 9]
