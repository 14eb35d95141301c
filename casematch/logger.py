"""ログ設定モジュール。

Python 標準 logging + RotatingFileHandler を使用したログ出力設定。
デフォルトの出力先は logs/casematch.log（自動作成）、5MB×5世代ローテーション。
ライブラリとして import しただけではログ設定を変更しない。
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from casematch.config import AppConfig

# デフォルトのログ出力先（リポジトリ直下の logs/）
DEFAULT_LOG_FILE = Path(__file__).resolve().parent.parent / "logs" / "casematch.log"

_MAX_BYTES = 5 * 1024 * 1024  # 5 MB
_BACKUP_COUNT = 5

_LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(log_level: str = "INFO", log_file: Path | str | None = None) -> Path:
    """ルートロガーにローテーション付きファイルハンドラを設定する。

    既存のハンドラはクリアするため、複数回呼んでも多重登録にならない。

    Args:
        log_level: ログレベル文字列（"DEBUG" / "INFO" / "WARNING" / "ERROR"）。
        log_file: 出力先ファイル。None または空文字の場合はデフォルトパス。

    Returns:
        実際に使用するログファイルのパス。
    """
    path = Path(log_file) if log_file else DEFAULT_LOG_FILE
    path.parent.mkdir(parents=True, exist_ok=True)

    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    file_handler = RotatingFileHandler(
        filename=str(path),
        maxBytes=_MAX_BYTES,
        backupCount=_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(numeric_level)
    file_handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    root_logger.addHandler(file_handler)

    logging.getLogger(__name__).info("ログ設定完了: level=%s, file=%s", log_level, path)
    return path


def setup_from_config(config: AppConfig) -> Path:
    """AppConfig の log_level / log_file に従ってログを設定する。"""
    return setup_logging(config.log_level, config.log_file or None)
