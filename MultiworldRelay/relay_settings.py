from __future__ import annotations

import configparser
import os
import traceback
from dataclasses import dataclass
from dataclasses import field

from MultiworldRelay.relay_console import ConsoleLog
from MultiworldRelay.relay_console import MessageType
from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_outgoing import DEFAULT_CLEAR_DELAY_FRAMES

MODULE_NAME = "RelaySettings"

RELAY_SECTION = "Relay"
ADDRESS_SECTION = "Addresses"


@dataclass(slots=True)
class RelaySettings:
    swap_button: bool = False
    clear_delay_frames: int = DEFAULT_CLEAR_DELAY_FRAMES
    debug_logs: bool = False
    addresses: AddressMap = field(default_factory=AddressMap)


def _parse_address(text: str) -> int:
    value = int(str(text).strip(), 0)
    if value < 0:
        raise ValueError(f"negative address {text!r}")
    return value


def _read_relay_section(config: configparser.ConfigParser, settings: RelaySettings) -> None:
    if not config.has_section(RELAY_SECTION):
        return
    try:
        settings.swap_button = config.getboolean(RELAY_SECTION, "swap_button", fallback=settings.swap_button)
    except ValueError:
        ConsoleLog(MODULE_NAME, "Invalid swap_button value, keeping default.", MessageType.Warning)
    try:
        settings.debug_logs = config.getboolean(RELAY_SECTION, "debug_logs", fallback=settings.debug_logs)
    except ValueError:
        ConsoleLog(MODULE_NAME, "Invalid debug_logs value, keeping default.", MessageType.Warning)
    try:
        delay = config.getint(RELAY_SECTION, "clear_delay_frames", fallback=settings.clear_delay_frames)
        if delay < 0:
            raise ValueError(delay)
        settings.clear_delay_frames = delay
    except ValueError:
        ConsoleLog(MODULE_NAME, "Invalid clear_delay_frames value, keeping default.", MessageType.Warning)


def _read_address_section(config: configparser.ConfigParser, settings: RelaySettings) -> None:
    if not config.has_section(ADDRESS_SECTION):
        return
    overrides: dict[str, int] = {}
    known = AddressMap.field_names()
    for key, value in config[ADDRESS_SECTION].items():
        if key not in known:
            ConsoleLog(MODULE_NAME, f"Unknown address key in config file: {key}", MessageType.Warning)
            continue
        try:
            overrides[key] = _parse_address(value)
        except ValueError:
            ConsoleLog(MODULE_NAME, f"Invalid address for {key}: {value}", MessageType.Warning)
    settings.addresses = settings.addresses.with_overrides(overrides)


def load_relay_settings(config_file: str) -> RelaySettings:
    """Load settings from *config_file*, writing a default file if none exists."""
    settings = RelaySettings()
    if not os.path.exists(config_file):
        ConsoleLog(MODULE_NAME, "Relay settings file not found. Creating default settings...")
        save_relay_settings(settings, config_file)
        return settings

    try:
        config = configparser.ConfigParser()
        config.read(config_file, encoding="utf-8")
        _read_relay_section(config, settings)
        _read_address_section(config, settings)
    except (configparser.Error, UnicodeDecodeError) as e:
        ConsoleLog(MODULE_NAME, f"Error loading relay settings from file: {str(e)}", MessageType.Error)
        ConsoleLog(MODULE_NAME, f"Stack trace: {traceback.format_exc()}", MessageType.Error)
        return RelaySettings()
    return settings


def save_relay_settings(settings: RelaySettings, config_file: str) -> bool:
    try:
        config = configparser.ConfigParser()
        config.add_section(RELAY_SECTION)
        config[RELAY_SECTION]["swap_button"] = str(bool(settings.swap_button))
        config[RELAY_SECTION]["clear_delay_frames"] = str(int(settings.clear_delay_frames))
        config[RELAY_SECTION]["debug_logs"] = str(bool(settings.debug_logs))

        config.add_section(ADDRESS_SECTION)
        for name in AddressMap.field_names():
            config[ADDRESS_SECTION][name] = f"0x{int(getattr(settings.addresses, name)):04X}"

        config_dir = os.path.dirname(config_file)
        if config_dir and not os.path.exists(config_dir):
            os.makedirs(config_dir)
        with open(config_file, "w", encoding="utf-8") as f:
            config.write(f)
        return True
    except OSError as e:
        ConsoleLog(MODULE_NAME, f"Error saving relay settings to file: {str(e)}", MessageType.Error)
        return False
