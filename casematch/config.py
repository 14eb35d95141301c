"""設定ファイル（config.yaml）の読み書き・デフォルト生成モジュール。

メッセージ言語、ログ設定、ドメイン（ラベル集合）の定義を扱う。
アトミック書き込みと .bak バックアップは utils モジュールを使用する。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

import yaml

from casematch.utils import atomic_write, safe_read_with_fallback

logger = logging.getLogger(__name__)

# デフォルトの config.yaml パス（settings ディレクトリ配下）
DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent.parent / "settings" / "config.yaml"

# generate_default で書き出すサンプルドメイン
SAMPLE_DOMAINS: dict[str, list[str]] = {
    "country": ["US", "DE", "GB"],
    "status": ["draft", "published", "archived"],
}


@dataclass
class AppConfig:
    """アプリケーション全体の設定。"""

    language: str = "ja"
    log_level: str = "INFO"
    log_file: str = ""
    domains: dict[str, list[str]] = field(default_factory=dict)


def _dict_to_domains(d: dict[str, Any]) -> dict[str, list[str]]:
    """domains セクションを {ドメイン名: ラベル列} に変換する。

    リストでないエントリは警告を出して無視する。ラベル自体の妥当性は
    LabelSet 生成時に検証する。

    YAML 1.1 では引用符のない NO / ON / YES などが真偽値になるため、
    文字列でないラベルはドメイン名と値を添えて警告する。
    """
    domains: dict[str, list[str]] = {}
    for name, labels in d.items():
        if not isinstance(labels, list):
            logger.warning("ドメイン定義がリストではないため無視します: %s", name)
            continue
        for label in labels:
            if not isinstance(label, str):
                logger.warning(
                    "ドメイン %s のラベルが文字列ではありません: %r"
                    "（NO や ON などは引用符で囲んでください）",
                    name,
                    label,
                )
        domains[str(name)] = list(labels)
    return domains


def _dict_to_app_config(d: dict[str, Any]) -> AppConfig:
    """辞書から AppConfig を生成する。"""
    domains_raw = d.get("domains") or {}
    return AppConfig(
        language=str(d.get("language", "ja")),
        log_level=str(d.get("log_level", "INFO")),
        log_file=str(d.get("log_file") or ""),
        domains=_dict_to_domains(domains_raw) if isinstance(domains_raw, dict) else {},
    )


def _app_config_to_dict(config: AppConfig) -> dict[str, Any]:
    """AppConfig を辞書に変換する（YAML 出力用）。"""
    return {
        "language": config.language,
        "log_level": config.log_level,
        "log_file": config.log_file,
        "domains": {name: list(labels) for name, labels in config.domains.items()},
    }


def _parse_yaml(raw: str) -> AppConfig:
    """YAML 文字列をパースして AppConfig を返す。"""
    data = yaml.safe_load(raw)
    if not isinstance(data, dict):
        raise ValueError("config.yaml のルートが辞書ではありません")
    return _dict_to_app_config(data)


def load(
    config_path: Path | None = None,
    *,
    notify_callback: Callable[[str, str], None] | None = None,
) -> AppConfig:
    """config.yaml を読み込む。失敗時は .bak → デフォルト値の順でフォールバックする。

    Args:
        config_path: config.yaml のパス。None の場合はデフォルトパスを使用。
        notify_callback: 復旧時の通知コールバック（title, message）。

    Returns:
        読み込んだ AppConfig。
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = safe_read_with_fallback(
        file_path=path,
        parser=_parse_yaml,
        default_factory=AppConfig,
        notify_callback=notify_callback,
    )
    logger.info("設定ファイルを読み込みました: %s (domains=%d)", path, len(config.domains))
    return config


def save(config: AppConfig, config_path: Path | None = None) -> None:
    """AppConfig を config.yaml に書き込む（アトミック書き込み + .bak バックアップ）。"""
    path = config_path or DEFAULT_CONFIG_PATH
    content = yaml.dump(
        _app_config_to_dict(config),
        default_flow_style=False,
        allow_unicode=True,
        sort_keys=False,
    )
    atomic_write(path, content, create_backup=True)
    logger.info("設定ファイルを保存しました: %s", path)


def generate_default(config_path: Path | None = None) -> AppConfig:
    """サンプルドメイン入りのデフォルト config.yaml を生成して保存する。

    Args:
        config_path: config.yaml のパス。None の場合はデフォルトパスを使用。

    Returns:
        生成した AppConfig。
    """
    config = AppConfig(domains={name: list(labels) for name, labels in SAMPLE_DOMAINS.items()})
    save(config, config_path)
    logger.info("デフォルト設定ファイルを生成しました")
    return config
