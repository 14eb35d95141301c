"""マッチ処理の例外クラス定義モジュール。

どの例外もプログラミングエラーを表し、リトライや局所的な回復は行わない。
メッセージは i18n モジュール経由で生成する。
"""

from __future__ import annotations

from typing import Any, Sequence

from casematch.i18n import t


def _join(labels: Sequence[Any]) -> str:
    return ", ".join(str(label) for label in labels)


class LabelSetError(ValueError):
    """ラベル集合の定義が不正な場合の例外。"""

    def __init__(self, domain: str, message: str) -> None:
        super().__init__(message)
        self.domain = domain


class MatchError(Exception):
    """マッチ処理で発生する例外の基底クラス。"""

    def __init__(self, domain: str, message: str) -> None:
        super().__init__(message)
        self.domain = domain


class UnknownValueError(MatchError):
    """対象値がラベル集合に含まれない。"""

    def __init__(self, domain: str, value: Any) -> None:
        super().__init__(domain, t("match.unknown_value", domain=domain, value=value))
        self.value = value


class DuplicateBindingError(MatchError):
    """同じラベルが1回の呼び出しで二重に束縛された。"""

    def __init__(self, domain: str, label: str) -> None:
        super().__init__(domain, t("match.duplicate_binding", domain=domain, label=label))
        self.label = label


class BindingCoverageError(MatchError):
    """束縛の網羅性チェック失敗の基底クラス。

    Attributes:
        missing: ハンドラが束縛されていないラベル（ラベル集合の定義順）。
        unknown: ラベル集合に存在しないのに束縛されたラベル（束縛順）。
    """

    def __init__(
        self,
        domain: str,
        message: str,
        *,
        missing: Sequence[str] = (),
        unknown: Sequence[str] = (),
    ) -> None:
        super().__init__(domain, message)
        self.missing: tuple[str, ...] = tuple(missing)
        self.unknown: tuple[str, ...] = tuple(unknown)


class MissingBindingError(BindingCoverageError):
    """ラベル集合の一部にハンドラが束縛されていない。"""

    def __init__(self, domain: str, labels: Sequence[str]) -> None:
        super().__init__(
            domain,
            t("match.missing_binding", domain=domain, labels=_join(labels)),
            missing=labels,
        )

    @property
    def labels(self) -> tuple[str, ...]:
        return self.missing


class UnknownBindingError(BindingCoverageError):
    """ラベル集合に存在しないラベルが束縛された。

    未束縛のラベルが同時に存在する場合も、この例外が優先され
    ``missing`` 属性にそれらが入る。
    """

    def __init__(
        self,
        domain: str,
        labels: Sequence[str],
        missing: Sequence[str] = (),
    ) -> None:
        if missing:
            message = t(
                "match.unknown_binding_and_missing",
                domain=domain,
                labels=_join(labels),
                missing=_join(missing),
            )
        else:
            message = t("match.unknown_binding", domain=domain, labels=_join(labels))
        super().__init__(domain, message, missing=missing, unknown=labels)

    @property
    def labels(self) -> tuple[str, ...]:
        return self.unknown


class UnsupportedCaseError(NotImplementedError):
    """意図的にサポートしないケースのハンドラが呼ばれた。"""

    def __init__(self, domain: str | None, value: Any, reason: str | None = None) -> None:
        # domain が None なのはハンドラを CaseTable 外で直接呼んだ場合
        if domain is None:
            if reason:
                message = t("match.unsupported_handler_reason", reason=reason)
            else:
                message = t("match.unsupported_handler")
        elif reason:
            message = t("match.unsupported_reason", domain=domain, value=value, reason=reason)
        else:
            message = t("match.unsupported", domain=domain, value=value)
        super().__init__(message)
        self.domain = domain
        self.value = value
        self.reason = reason
