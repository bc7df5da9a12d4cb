from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Iterator

from MultiworldRelay.relay_models import PlayerState


@dataclass(slots=True)
class Session:
    players: dict[int, PlayerState] = field(default_factory=dict)

    def player(self, player_id: int) -> PlayerState:
        key = int(player_id)
        state = self.players.get(key)
        if state is None:
            state = PlayerState()
            self.players[key] = state
        return state


class SeedRegistry:
    """
    Process-wide seed -> player -> state map.

    Owned by whatever drives the ticks and handed to each plugin instance.
    Entries are never removed, so items queued for a player whose game is not
    in the foreground wait here until that game is loaded again.
    """

    def __init__(self) -> None:
        self._sessions: dict[int, Session] = {}

    def session(self, seed: int) -> Session:
        key = int(seed)
        session = self._sessions.get(key)
        if session is None:
            session = Session()
            self._sessions[key] = session
        return session

    def player(self, seed: int, player_id: int) -> PlayerState:
        return self.session(seed).player(player_id)

    def has_seed(self, seed: int) -> bool:
        return int(seed) in self._sessions

    def seeds(self) -> list[int]:
        return sorted(self._sessions.keys())

    def iter_players(self) -> Iterator[tuple[int, int, PlayerState]]:
        for seed in self.seeds():
            session = self._sessions[seed]
            for player_id in sorted(session.players.keys()):
                yield seed, player_id, session.players[player_id]
