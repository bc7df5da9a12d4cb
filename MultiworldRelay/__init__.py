from MultiworldRelay.relay_identity import SessionIdentity
from MultiworldRelay.relay_identity import read_session_identity
from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_models import CandidateEvent
from MultiworldRelay.relay_models import ConfirmedEvent
from MultiworldRelay.relay_models import PlayerState
from MultiworldRelay.relay_plugin import MultiworldRelayPlugin
from MultiworldRelay.relay_plugin import TickReport
from MultiworldRelay.relay_registry import SeedRegistry
from MultiworldRelay.relay_registry import Session
from MultiworldRelay.relay_settings import RelaySettings
from MultiworldRelay.relay_settings import load_relay_settings
from MultiworldRelay.relay_store import load_registry
from MultiworldRelay.relay_store import save_registry

__all__ = [
    "AddressMap",
    "CandidateEvent",
    "ConfirmedEvent",
    "MultiworldRelayPlugin",
    "PlayerState",
    "RelaySettings",
    "SeedRegistry",
    "Session",
    "SessionIdentity",
    "TickReport",
    "load_registry",
    "load_relay_settings",
    "read_session_identity",
    "save_registry",
]
