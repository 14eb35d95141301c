"""多言語対応（i18n）モジュール。

エラーメッセージ用の辞書ベース翻訳を提供する。
`t(key)` 関数で現在の言語設定に対応する文字列を返す。
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

# サポートする言語の一覧（コード → 表示名）
SUPPORTED_LANGUAGES: dict[str, str] = {
    "ja": "日本語",
    "en": "English",
}

# 現在の言語（デフォルト: 日本語）
_current_language: str = "ja"

# ── 翻訳文字列カタログ ──
# キーはドット区切りの階層構造（例: "match.unknown_value"）
_STRINGS: dict[str, dict[str, str]] = {
    "ja": {
        # マッチ処理
        "match.unknown_value": "ドメイン '{domain}' に存在しない値です: {value!r}",
        "match.duplicate_binding": "ドメイン '{domain}' のラベル '{label}' が二重に束縛されています",
        "match.missing_binding": "ドメイン '{domain}' のラベルに対応するハンドラがありません: {labels}",
        "match.unknown_binding": "ドメイン '{domain}' に存在しないラベルが束縛されています: {labels}",
        "match.unknown_binding_and_missing": "ドメイン '{domain}' に存在しないラベルが束縛されています: {labels}（未束縛: {missing}）",
        "match.unsupported": "ドメイン '{domain}' の値 {value!r} はサポートされていません",
        "match.unsupported_reason": "ドメイン '{domain}' の値 {value!r} はサポートされていません: {reason}",
        "match.unsupported_handler": "サポートされていないケースのハンドラが呼び出されました",
        "match.unsupported_handler_reason": "サポートされていないケースのハンドラが呼び出されました: {reason}",
        "match.handler_not_callable": "ラベル '{label}' のハンドラが呼び出し可能ではありません: {handler!r}",
        # ラベル集合の定義
        "label_set.empty": "ドメイン '{domain}' のラベル集合が空です",
        "label_set.invalid_label": "ドメイン '{domain}' のラベルは空でない文字列である必要があります: {label!r}",
        "label_set.duplicate_labels": "ドメイン '{domain}' のラベルが重複しています: {labels}",
        # ドメインレジストリ
        "domains.conflict": "ドメイン '{domain}' は異なるラベルで登録済みです",
        "domains.not_found": "ドメイン '{domain}' は登録されていません（登録済み: {known}）",
        # 設定ファイル
        "config.file_recovery": "設定ファイルの復旧",
        "config.restored_from_backup": "{name} をバックアップから復元しました",
        "config.regenerated_default": "{name} を読み込めなかったためデフォルト設定を使用します",
    },
    "en": {
        "match.unknown_value": "Value is not a member of domain '{domain}': {value!r}",
        "match.duplicate_binding": "Label '{label}' of domain '{domain}' is bound more than once",
        "match.missing_binding": "No handler bound for labels of domain '{domain}': {labels}",
        "match.unknown_binding": "Labels bound that do not belong to domain '{domain}': {labels}",
        "match.unknown_binding_and_missing": "Labels bound that do not belong to domain '{domain}': {labels} (unbound: {missing})",
        "match.unsupported": "Value {value!r} of domain '{domain}' is not supported",
        "match.unsupported_reason": "Value {value!r} of domain '{domain}' is not supported: {reason}",
        "match.unsupported_handler": "Handler for an unsupported case was called",
        "match.unsupported_handler_reason": "Handler for an unsupported case was called: {reason}",
        "match.handler_not_callable": "Handler for label '{label}' is not callable: {handler!r}",
        "label_set.empty": "Label set of domain '{domain}' is empty",
        "label_set.invalid_label": "Labels of domain '{domain}' must be non-empty strings: {label!r}",
        "label_set.duplicate_labels": "Duplicate labels in domain '{domain}': {labels}",
        "domains.conflict": "Domain '{domain}' is already registered with different labels",
        "domains.not_found": "Domain '{domain}' is not registered (known: {known})",
        "config.file_recovery": "Configuration Recovery",
        "config.restored_from_backup": "Restored {name} from backup",
        "config.regenerated_default": "Could not read {name}; using default settings",
    },
}


def set_language(lang: str) -> None:
    """現在の言語を切り替える。

    Args:
        lang: 言語コード（"ja" or "en"）。
              サポート外の値が渡された場合は "ja" にフォールバックする。
    """
    global _current_language
    old = _current_language
    _current_language = lang if lang in SUPPORTED_LANGUAGES else "ja"
    if old != _current_language:
        logger.info("Language changed: %s -> %s", old, _current_language)


def get_language() -> str:
    """現在の言語コードを返す。"""
    return _current_language


def t(key: str, **kwargs: object) -> str:
    """翻訳済み文字列を返す。

    現在の言語 → 日本語 → キー自体 の順で検索する。

    Args:
        key: 翻訳キー（例: "match.unknown_value"）。
        **kwargs: `.format()` に渡す埋め込みパラメータ。

    Returns:
        翻訳済み文字列。
    """
    text = _STRINGS.get(_current_language, {}).get(key)
    if text is None:
        text = _STRINGS["ja"].get(key, key)

    if kwargs:
        try:
            text = text.format(**kwargs)
        except (KeyError, IndexError):
            logger.debug("フォーマット失敗: key=%s", key)

    return text
