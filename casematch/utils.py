"""ファイル I/O ユーティリティモジュール。

設定ファイルの安全な書き込み（write-then-rename + .bak）と、
読み込み失敗時のフォールバックを提供する。
"""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path
from typing import Callable, TypeVar

from casematch.i18n import t

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _sibling(path: Path, suffix: str) -> Path:
    return path.with_name(path.name + suffix)


def atomic_write(file_path: Path, content: str, *, create_backup: bool = True) -> None:
    """ファイルをアトミックに書き込む。

    一時ファイル（<ファイル名>.tmp）に書き込んで fsync した後、
    既存ファイルを .bak に退避し、一時ファイルを本体へリネームする。

    Args:
        file_path: 書き込み先のファイルパス。
        content: 書き込む内容。
        create_backup: True の場合、既存ファイルの .bak を作成する。
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = _sibling(file_path, ".tmp")

    try:
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())

        if create_backup and file_path.exists():
            bak_path = _sibling(file_path, ".bak")
            try:
                shutil.copy2(file_path, bak_path)
            except OSError as e:
                logger.warning("バックアップ作成に失敗: %s (%s)", bak_path, e)

        os.replace(tmp_path, file_path)
        logger.debug("アトミック書き込み完了: %s", file_path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def safe_read_with_fallback(
    file_path: Path,
    parser: Callable[[str], T],
    default_factory: Callable[[], T],
    *,
    notify_callback: Callable[[str, str], None] | None = None,
) -> T:
    """ファイルを読み込み、失敗時は .bak → デフォルト値の順でフォールバックする。

    Args:
        file_path: 読み込むファイルパス。
        parser: ファイル内容をパースする関数。例外を送出すれば失敗とみなす。
        default_factory: デフォルト値を返すファクトリ関数。
        notify_callback: 復旧時の通知コールバック（title, message）。

    Returns:
        パース結果またはデフォルト値。
    """
    file_path = Path(file_path)

    for candidate, restored in ((file_path, False), (_sibling(file_path, ".bak"), True)):
        if not candidate.exists():
            continue
        try:
            result = parser(candidate.read_text(encoding="utf-8"))
        except Exception as e:
            logger.warning("読み込み/パース失敗: %s (%s)", candidate, e)
            continue
        if restored:
            logger.warning(".bak から復元しました: %s", candidate)
            if notify_callback:
                notify_callback(
                    t("config.file_recovery"),
                    t("config.restored_from_backup", name=file_path.name),
                )
        return result

    if file_path.exists() and notify_callback:
        notify_callback(
            t("config.file_recovery"),
            t("config.regenerated_default", name=file_path.name),
        )
    logger.info("デフォルト値を使用します: %s", file_path)
    return default_factory()
