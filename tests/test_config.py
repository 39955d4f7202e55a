import json
import pytest
from dashdock.core.config import AppConfig, ConfigManager


def test_config_read_default(tmp_path):
    config = ConfigManager(str(tmp_path / "config.json"))
    assert config.data.layout.default_dashboard_label == "Dashboard"
    assert config.data.layout.default_split_sizes == [1.0, 1.0]
    assert config.data.session.session_file == "session.json"


def test_config_written_on_first_load(tmp_path):
    path = tmp_path / "nested" / "config.json"
    ConfigManager(str(path))

    assert path.exists()
    saved = json.loads(path.read_text(encoding="utf-8"))
    assert saved["general"]["debug_mode"] is True


def test_config_update_event(tmp_path):
    config = ConfigManager(str(tmp_path / "config.json"))
    received = []

    def on_change(section, key, val):
        received.append((section, key, val))

    config.on_changed.connect(on_change)
    config.update("layout", "default_dashboard_label", "Sheet")

    assert config.data.layout.default_dashboard_label == "Sheet"
    assert received[-1] == ("layout", "default_dashboard_label", "Sheet")

    reloaded = ConfigManager(str(tmp_path / "config.json"))
    assert reloaded.get("layout", "default_dashboard_label") == "Sheet"


def test_config_update_rejects_unknown_section_and_key():
    config = ConfigManager(None)
    with pytest.raises(ValueError):
        config.update("mongo", "host", "x")
    with pytest.raises(ValueError):
        config.update("layout", "no_such_key", 1)


def test_config_update_validates_value():
    config = ConfigManager(None)
    with pytest.raises(ValueError):
        config.update("general", "debug_mode", "not-a-bool")
    assert config.data.general.debug_mode is True


def test_config_split_sizes_must_be_two_positive_weights():
    config = ConfigManager(None)
    config.update("layout", "default_split_sizes", [2.0, 1.0])
    assert config.get("layout", "default_split_sizes") == [2.0, 1.0]

    for bad in ([1.0], [1.0, 1.0, 1.0], [0.0, 1.0]):
        with pytest.raises(ValueError):
            config.update("layout", "default_split_sizes", bad)
    assert config.data.layout.default_split_sizes == [2.0, 1.0]


def test_config_loads_toml(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text('[layout]\ndefault_dashboard_label = "Board"\nstart_locked = true\n', encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data.layout.default_dashboard_label == "Board"
    assert config.data.layout.start_locked is True


def test_config_invalid_file_falls_back_to_defaults(tmp_path, log_messages):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")

    config = ConfigManager(str(path))

    assert config.data == AppConfig()
    assert any("Failed to load config" in m for m in log_messages)
