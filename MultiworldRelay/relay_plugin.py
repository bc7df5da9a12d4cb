from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field
from typing import Callable

from MultiworldRelay.relay_confirm import confirm_pending
from MultiworldRelay.relay_confirm import discard_pending
from MultiworldRelay.relay_console import ConsoleLog
from MultiworldRelay.relay_console import MessageType
from MultiworldRelay.relay_identity import SessionIdentity
from MultiworldRelay.relay_mailbox import drain_mailbox
from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_memory import RelayMemory
from MultiworldRelay.relay_models import CandidateEvent
from MultiworldRelay.relay_models import ConfirmedEvent
from MultiworldRelay.relay_modes import TickMode
from MultiworldRelay.relay_modes import classify_game_mode
from MultiworldRelay.relay_outgoing import detect_outgoing
from MultiworldRelay.relay_outgoing import tick_clear_delay
from MultiworldRelay.relay_registry import SeedRegistry
from MultiworldRelay.relay_settings import RelaySettings
from MultiworldRelay.relay_snapshot import capture_snapshot

MODULE_NAME = "MultiworldRelay"


class SwapButtonWatcher:
    def __init__(self) -> None:
        # Starts pressed so a button held through a game load does not swap again.
        self.prev_pressed = True

    def reset(self) -> None:
        self.prev_pressed = True

    def update(self, pressed: bool) -> bool:
        current = bool(pressed)
        fired = current and not self.prev_pressed
        self.prev_pressed = current
        return fired


@dataclass(slots=True)
class TickReport:
    mode: TickMode = TickMode.Other
    detected: CandidateEvent | None = None
    delivered: ConfirmedEvent | None = None
    confirmed: ConfirmedEvent | None = None
    discarded: list[CandidateEvent] = field(default_factory=list)
    healed: bool = False
    cleared: bool = False
    swapped: bool = False


class MultiworldRelayPlugin:
    """
    Per-frame item relay for one emulator instance.

    The host calls ``on_game_load`` whenever a different game becomes the
    foreground one and ``on_frame`` once per emulated frame. All cross-game
    state lives in the ``SeedRegistry`` passed in, so the same registry should
    be shared by everything that drives games of the same seed.
    """

    def __init__(
        self,
        registry: SeedRegistry,
        memory: RelayMemory,
        settings: RelaySettings | None = None,
        swap_game_fn: Callable[[], None] | None = None,
        read_swap_button_fn: Callable[[], bool] | None = None,
    ) -> None:
        self.registry = registry
        self.memory = memory
        self.settings = settings or RelaySettings()
        self.swap_game_fn = swap_game_fn
        self.read_swap_button_fn = read_swap_button_fn
        self.swap_watcher = SwapButtonWatcher()
        self.identity: SessionIdentity | None = None

    @property
    def addresses(self) -> AddressMap:
        return self.settings.addresses

    def on_game_load(self, identity: SessionIdentity | None) -> None:
        self.identity = identity
        self.swap_watcher.reset()
        if identity is None:
            return

        state = self.registry.player(identity.seed, identity.player)
        state.prev_snapshot = capture_snapshot(self.memory, self.addresses)
        ConsoleLog(
            MODULE_NAME,
            (
                f"Loaded seed={identity.seed} player={identity.player} "
                f"queued={len(state.mailbox)} pending={len(state.pending)}"
            ),
            MessageType.Info,
        )

    def on_frame(self) -> TickReport:
        report = TickReport()
        if self.identity is None:
            return report

        seed = self.identity.seed
        player_id = self.identity.player
        session = self.registry.session(seed)
        state = session.player(player_id)
        current_snapshot = capture_snapshot(self.memory, self.addresses)

        report.mode = classify_game_mode(self.memory.read_u8(self.addresses.game_mode))
        if report.mode == TickMode.Active:
            report.detected = detect_outgoing(
                self.memory,
                self.addresses,
                state,
                player_id,
                self.settings.clear_delay_frames,
            )
            if report.detected is not None and self.settings.debug_logs:
                ConsoleLog(
                    MODULE_NAME,
                    (
                        f"QUEUED item={report.detected.item} src={report.detected.source} "
                        f"target={report.detected.target} pending={len(state.pending)}"
                    ),
                    MessageType.Debug,
                )

            drained = drain_mailbox(self.memory, self.addresses, state.mailbox)
            report.healed = drained.healed
            report.delivered = drained.delivered
            if report.healed:
                ConsoleLog(
                    MODULE_NAME,
                    f"Receive counter {drained.recv_count} exceeds queue length {len(state.mailbox)}, resetting.",
                    MessageType.Warning,
                )
            if report.delivered is not None:
                ConsoleLog(
                    MODULE_NAME,
                    f"RECV item={report.delivered.item} from player {report.delivered.source}",
                    MessageType.Info,
                )

        report.cleared = tick_clear_delay(self.memory, self.addresses, state)

        if report.mode == TickMode.Reset and state.pending:
            # A reset before the state change means the item never left this game.
            report.discarded = discard_pending(state)
            ConsoleLog(
                MODULE_NAME,
                f"Reset with {len(report.discarded)} unconfirmed send(s); discarding.",
                MessageType.Warning,
            )

        result = confirm_pending(session, state, current_snapshot)
        if result is not None:
            report.confirmed = result.event
            if result.appended:
                ConsoleLog(
                    MODULE_NAME,
                    f"SENT item={result.event.item} to player {result.event.target}",
                    MessageType.Info,
                )
            elif self.settings.debug_logs:
                ConsoleLog(
                    MODULE_NAME,
                    f"Duplicate confirmation ignored: {result.event.fingerprint}",
                    MessageType.Debug,
                )
        state.prev_snapshot = current_snapshot

        if self.settings.swap_button and self.read_swap_button_fn is not None:
            if self.swap_watcher.update(self.read_swap_button_fn()) and self.swap_game_fn is not None:
                report.swapped = True
                self.swap_game_fn()
        return report
