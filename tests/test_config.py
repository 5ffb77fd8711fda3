# tests/test_config.py
import logging

from boerenbridge import config


def test_data_dir_defaults_to_package(monkeypatch):
    monkeypatch.delenv(config.DATA_DIR_ENV, raising=False)
    assert config.data_dir() == config.DEFAULT_DATA_DIR


def test_resolve_data_path(tmp_path, monkeypatch):
    monkeypatch.setenv(config.DATA_DIR_ENV, str(tmp_path / "data"))

    resolved = config.resolve_data_path("export.csv")
    assert resolved == tmp_path / "data" / "export.csv"
    assert (tmp_path / "data").is_dir()

    absolute = tmp_path / "elsewhere.csv"
    assert config.resolve_data_path(absolute) == absolute
    assert config.default_save_path().name == "boerenbridge_game_state.json"


def test_configure_logging_uses_environment(monkeypatch):
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    try:
        monkeypatch.setenv(config.LOG_LEVEL_ENV, "debug")
        config.configure_logging()
        assert root.level == logging.DEBUG
    finally:
        root.handlers = saved_handlers
        root.setLevel(saved_level)
