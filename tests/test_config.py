import logging

from medianstream import config
from medianstream.utils.logger import setup_project_logging


def test_merge_configs_without_user_config_returns_defaults():
    assert config.merge_configs(None) == config.DEFAULT_CONFIG
    assert config.merge_configs({}) is not config.DEFAULT_CONFIG


def test_merge_configs_overrides_section_keys():
    merged = config.merge_configs({"median_filter": {"window_size": 9}, "unknown": {"x": 1}})
    assert merged["median_filter"]["window_size"] == 9
    assert merged["median_filter"]["seed"] == config.DEFAULT_CONFIG["median_filter"]["seed"]
    assert "unknown" not in merged
    assert config.DEFAULT_CONFIG["median_filter"]["window_size"] == 5


def test_get_log_level(monkeypatch):
    monkeypatch.setattr(config, "LOG_LEVEL", "WARNING")
    assert config.get_log_level() == logging.WARNING
    monkeypatch.setattr(config, "LOG_LEVEL", "NOPE")
    assert config.get_log_level() == logging.INFO


def test_setup_project_logging_writes_log_file(tmp_path, clean_root_logger):
    root_logger = setup_project_logging(level=logging.DEBUG, logs_dir=tmp_path)
    assert root_logger is clean_root_logger
    assert any(isinstance(h, logging.FileHandler) for h in root_logger.handlers)
    assert len(list(tmp_path.glob("*.log"))) == 1

    handler_count = len(root_logger.handlers)
    setup_project_logging(level=logging.DEBUG, logs_dir=tmp_path)
    assert len(root_logger.handlers) == handler_count


def test_setup_project_logging_defaults_to_configured_level(tmp_path, monkeypatch, clean_root_logger):
    monkeypatch.setattr(config, "LOG_LEVEL", "WARNING")
    monkeypatch.setattr(config, "LOGS_DIR", tmp_path / "logs")
    root_logger = setup_project_logging()
    assert root_logger.level == logging.WARNING
    file_handlers = [h for h in root_logger.handlers if isinstance(h, logging.FileHandler)]
    assert file_handlers and all(h.level == logging.WARNING for h in file_handlers)
    assert len(list((tmp_path / "logs").glob("medianstream-*.log"))) == 1
