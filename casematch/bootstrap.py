"""設定ファイルからの初期化モジュール。

起動フロー:
1. config.load()
2. logger.setup_from_config()（configure_logging=True の場合のみ）
3. i18n.set_language()
4. DomainRegistry.from_config()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from casematch import config as config_module
from casematch.domains import DomainRegistry
from casematch.i18n import set_language
from casematch.logger import setup_from_config

logger = logging.getLogger(__name__)


def initialize(
    config_path: Path | None = None,
    *,
    configure_logging: bool = True,
    notify_callback: Callable[[str, str], None] | None = None,
) -> DomainRegistry:
    """config.yaml を読み込み、ログ・言語を設定してドメインレジストリを返す。

    Args:
        config_path: config.yaml のパス。None の場合はデフォルトパスを使用。
        configure_logging: False の場合、ルートロガーには触れない。
        notify_callback: 設定ファイル復旧時の通知コールバック（title, message）。

    Returns:
        設定の domains から構築したレジストリ。

    Raises:
        LabelSetError: ドメイン定義が不正な場合。
    """
    app_config = config_module.load(config_path, notify_callback=notify_callback)
    if configure_logging:
        setup_from_config(app_config)
    set_language(app_config.language)
    logger.info("Config loaded: language=%s, log_level=%s", app_config.language, app_config.log_level)
    return DomainRegistry.from_config(app_config)
