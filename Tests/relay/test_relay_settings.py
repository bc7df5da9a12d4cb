from __future__ import annotations

import logging

from MultiworldRelay.relay_memory import AddressMap
from MultiworldRelay.relay_settings import RelaySettings
from MultiworldRelay.relay_settings import load_relay_settings
from MultiworldRelay.relay_settings import save_relay_settings


def test_missing_file_is_created_with_defaults(tmp_path):
    path = tmp_path / "Config" / "relay.ini"
    settings = load_relay_settings(str(path))
    assert settings == RelaySettings()
    assert path.exists()
    text = path.read_text()
    assert "[Relay]" in text
    assert "recv_count = 0xF4F0" in text


def test_round_trip_keeps_values(tmp_path):
    path = tmp_path / "relay.ini"
    saved = RelaySettings(
        swap_button=True,
        clear_delay_frames=3,
        debug_logs=True,
        addresses=AddressMap().with_overrides({"sram_size": 0x400}),
    )
    assert save_relay_settings(saved, str(path)) is True
    assert load_relay_settings(str(path)) == saved


def test_invalid_values_keep_defaults_and_warn(tmp_path, caplog):
    path = tmp_path / "relay.ini"
    path.write_text(
        "[Relay]\n"
        "swap_button = maybe\n"
        "clear_delay_frames = -2\n"
        "[Addresses]\n"
        "recv_count = nope\n"
        "outgoing_item = 0x0300\n"
        "bogus = 0x10\n"
    )
    with caplog.at_level(logging.WARNING, logger="MultiworldRelay"):
        settings = load_relay_settings(str(path))

    assert settings.swap_button is False
    assert settings.clear_delay_frames == 1
    assert settings.addresses.recv_count == AddressMap().recv_count
    assert settings.addresses.outgoing_item == 0x0300
    assert "swap_button" in caplog.text
    assert "bogus" in caplog.text


def test_malformed_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "relay.ini"
    path.write_text("swap_button = true\n")
    with caplog.at_level(logging.ERROR, logger="MultiworldRelay"):
        settings = load_relay_settings(str(path))
    assert settings == RelaySettings()
    assert "Error loading relay settings" in caplog.text


def test_non_utf8_file_falls_back_to_defaults(tmp_path, caplog):
    path = tmp_path / "relay.ini"
    path.write_bytes(b"[Relay]\nswap_button = \xff\xfe\n")
    with caplog.at_level(logging.ERROR, logger="MultiworldRelay"):
        settings = load_relay_settings(str(path))
    assert settings == RelaySettings()
    assert "Error loading relay settings" in caplog.text
