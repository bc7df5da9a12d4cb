from __future__ import annotations

import json
import os
from typing import Any

from MultiworldRelay.relay_console import ConsoleLog
from MultiworldRelay.relay_console import MessageType
from MultiworldRelay.relay_models import CandidateEvent
from MultiworldRelay.relay_models import ConfirmedEvent
from MultiworldRelay.relay_registry import SeedRegistry

MODULE_NAME = "RelayStore"
STORE_VERSION = 1


def _safe_int(value: Any, default: int = 0) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _as_list(value: Any) -> list[Any]:
    return list(value) if isinstance(value, list) else []


def registry_to_dict(registry: SeedRegistry) -> dict[str, Any]:
    seeds: dict[str, dict[str, Any]] = {}
    for seed, player_id, state in registry.iter_players():
        players = seeds.setdefault(str(seed), {})
        players[str(player_id)] = {
            "mailbox": [event.to_dict() for event in state.mailbox],
            "pending": [candidate.to_dict() for candidate in state.pending],
            "clear_delay": int(state.clear_delay),
            "clear_armed": bool(state.clear_armed),
        }
    return {"version": STORE_VERSION, "seeds": seeds}


def registry_from_dict(data: Any) -> SeedRegistry:
    """Rebuild a registry, skipping entries that do not parse. Snapshots start empty."""
    registry = SeedRegistry()
    if not isinstance(data, dict):
        return registry
    seeds = data.get("seeds", {})
    if not isinstance(seeds, dict):
        return registry

    for seed_key, players in seeds.items():
        seed = _safe_int(seed_key, -1)
        if seed < 0 or not isinstance(players, dict):
            continue
        session = registry.session(seed)
        for player_key, payload in players.items():
            player_id = _safe_int(player_key, -1)
            if player_id < 0 or not isinstance(payload, dict):
                continue
            state = session.player(player_id)
            for raw in _as_list(payload.get("mailbox")):
                event = ConfirmedEvent.from_dict(raw)
                if event is not None and event not in state.mailbox:
                    state.mailbox.append(event)
            for raw in _as_list(payload.get("pending")):
                candidate = CandidateEvent.from_dict(raw)
                if candidate is not None:
                    state.pending.append(candidate)
            state.clear_delay = max(0, _safe_int(payload.get("clear_delay"), 0))
            state.clear_armed = payload.get("clear_armed") is True
    return registry


def save_registry(registry: SeedRegistry, path: str) -> bool:
    try:
        directory = os.path.dirname(path)
        if directory and not os.path.exists(directory):
            os.makedirs(directory)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(registry_to_dict(registry), f, separators=(",", ":"))
        return True
    except OSError as e:
        ConsoleLog(MODULE_NAME, f"Failed to save relay state: {e}", MessageType.Error)
        return False


def load_registry(path: str) -> SeedRegistry:
    if not os.path.exists(path):
        return SeedRegistry()
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        ConsoleLog(MODULE_NAME, f"Failed to load relay state, starting empty: {e}", MessageType.Warning)
        return SeedRegistry()
    return registry_from_dict(data)
