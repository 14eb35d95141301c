"""logger / bootstrap モジュールのテスト。"""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

import pytest

from casematch.bootstrap import initialize
from casematch.config import AppConfig, save
from casematch.errors import LabelSetError
from casematch.i18n import get_language, set_language
from casematch.logger import setup_from_config, setup_logging


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """ルートロガーのハンドラ・レベルと言語設定をテスト後に元へ戻す。"""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        if handler not in handlers:
            root.removeHandler(handler)
            handler.close()
    for handler in handlers:
        if handler not in root.handlers:
            root.addHandler(handler)
    root.setLevel(level)
    set_language("ja")


def _file_handlers() -> list[RotatingFileHandler]:
    return [h for h in logging.getLogger().handlers if isinstance(h, RotatingFileHandler)]


class TestSetupLogging:
    def test_writes_to_given_file(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "test.log"
        assert setup_logging("DEBUG", log_file) == log_file
        logging.getLogger("casematch.test").debug("hello log")
        for handler in _file_handlers():
            handler.flush()
        assert "hello log" in log_file.read_text(encoding="utf-8")

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path: Path):
        setup_logging("INFO", tmp_path / "a.log")
        setup_logging("INFO", tmp_path / "a.log")
        assert len(_file_handlers()) == 1

    def test_unknown_level_falls_back_to_info(self, tmp_path: Path):
        setup_logging("NOPE", tmp_path / "a.log")
        assert logging.getLogger().level == logging.INFO

    def test_setup_from_config(self, tmp_path: Path):
        log_file = tmp_path / "cfg.log"
        path = setup_from_config(AppConfig(log_level="WARNING", log_file=str(log_file)))
        assert path == log_file
        assert logging.getLogger().level == logging.WARNING


class TestInitialize:
    def test_builds_registry_and_applies_language(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        save(AppConfig(language="en", domains={"country": ["US", "DE", "GB"]}), config_path)
        registry = initialize(config_path, configure_logging=False)
        assert registry.names() == ["country"]
        assert get_language() == "en"

    def test_configures_logging(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        log_file = tmp_path / "init.log"
        save(AppConfig(log_file=str(log_file)), config_path)
        initialize(config_path)
        assert log_file.exists()

    def test_invalid_domain_surfaces(self, tmp_path: Path):
        config_path = tmp_path / "config.yaml"
        save(AppConfig(domains={"country": []}), config_path)
        with pytest.raises(LabelSetError):
            initialize(config_path, configure_logging=False)
