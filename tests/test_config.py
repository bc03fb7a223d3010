"""Tests for core.config.load_config."""

from core.config import AppConfig, load_config


def test_defaults():
    cfg = load_config(env={}, app_data_dir="/data", music_dir="/music")
    assert cfg == AppConfig(app_data_dir="/data", music_dir="/music")


def test_reads_environment():
    env = {
        "BANDPLAYER_SKIP_SECONDS": "5",
        "BANDPLAYER_LOAD_TIMEOUT_MS": "0",
        "BANDPLAYER_VOLUME": "0.25",
        "BANDPLAYER_LOG_LEVEL": "debug",
        "BANDPLAYER_DATA_DIR": "/tmp/bp",
        "BANDPLAYER_MUSIC_DIR": "/srv/music",
    }
    cfg = load_config(env=env, app_data_dir="/data", music_dir="/music")
    assert cfg.skip_seconds == 5.0
    assert cfg.load_timeout_ms == 0
    assert cfg.volume == 0.25
    assert cfg.log_level == "DEBUG"
    assert cfg.app_data_dir == "/tmp/bp"
    assert cfg.music_dir == "/srv/music"


def test_invalid_values_fall_back():
    env = {
        "BANDPLAYER_SKIP_SECONDS": "ten",
        "BANDPLAYER_LOAD_TIMEOUT_MS": "-3",
        "BANDPLAYER_VOLUME": "4",
        "BANDPLAYER_LOG_LEVEL": "loud",
    }
    cfg = load_config(env=env)
    defaults = AppConfig()
    assert cfg.skip_seconds == defaults.skip_seconds
    assert cfg.load_timeout_ms == defaults.load_timeout_ms
    assert cfg.volume == defaults.volume
    assert cfg.log_level == defaults.log_level


def test_blank_values_are_unset():
    cfg = load_config(env={"BANDPLAYER_VOLUME": "  ", "BANDPLAYER_DATA_DIR": ""}, app_data_dir="/data")
    assert cfg.volume == AppConfig().volume
    assert cfg.app_data_dir == "/data"
