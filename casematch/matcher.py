"""網羅性チェック付きの値マッチモジュール。

ラベル集合の各ラベルにちょうど1つずつハンドラを束縛させ、
対象値に一致するラベルのハンドラだけを呼び出す。

検証は次の順で行い、すべてハンドラ実行前に完了する:

1. 束縛の収集中に二重束縛を検出 → DuplicateBindingError
2. 網羅性チェック → UnknownBindingError / MissingBindingError
3. 対象値の所属チェック → UnknownValueError

束縛の誤りは対象値に関係なく同じように失敗するため、固定の対象値で
書かれたテストでも、ドメインへのラベル追加に伴う束縛漏れを検出できる。
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping, Union

from casematch.errors import (
    DuplicateBindingError,
    MissingBindingError,
    UnknownBindingError,
    UnknownValueError,
    UnsupportedCaseError,
)
from casematch.i18n import t

if TYPE_CHECKING:
    from casematch.label_set import LabelSet

logger = logging.getLogger(__name__)

Handler = Callable[..., Any]
Bindings = Union[Mapping[Any, Handler], Iterable[tuple[Any, Handler]]]


class Unsupported:
    """意図的にサポートしないケースを表すハンドラ。

    束縛としては有効に数えられ、呼び出されると UnsupportedCaseError を送出する。
    CaseTable 経由ではドメイン名と対象値がメッセージに入るが、直接呼び出した
    場合はどちらも不明なので理由だけのメッセージになる。
    """

    def __init__(self, reason: str | None = None) -> None:
        self.reason = reason

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        raise UnsupportedCaseError(None, None, self.reason)

    def __repr__(self) -> str:
        return f"Unsupported(reason={self.reason!r})"


def unsupported(reason: str | None = None) -> Unsupported:
    """サポートしないケース用のハンドラを返す。

    Args:
        reason: エラーメッセージに含める理由。

    Returns:
        呼び出されると UnsupportedCaseError を送出するハンドラ。
    """
    return Unsupported(reason)


def _bind(
    label_set: LabelSet,
    collected: dict[Any, Handler],
    unhashable: list[Any],
    label: Any,
    handler: Handler,
) -> None:
    """1件の束縛を追加する。二重束縛はその場で失敗させる。

    ハッシュ不可能なラベルはラベル集合に属し得ないため unhashable に退避し、
    網羅性チェックで未知の束縛として報告する。
    """
    label = label_set.coerce(label)
    try:
        hash(label)
    except TypeError:
        hashable = False
    else:
        hashable = True

    if hashable and label in collected:
        logger.debug("二重束縛を検出: domain=%s, label=%s", label_set.name, label)
        raise DuplicateBindingError(label_set.name, label)
    if not callable(handler):
        raise TypeError(t("match.handler_not_callable", label=label, handler=handler))

    if hashable:
        collected[label] = handler
    else:
        unhashable.append(label)


def _collect(label_set: LabelSet, bindings: Bindings) -> tuple[dict[Any, Handler], list[Any]]:
    """束縛を収集する（マッピングまたは (ラベル, ハンドラ) の列）。

    Returns:
        (ハッシュ可能なラベル → ハンドラ, ハッシュ不可能なラベルのリスト)。
    """
    pairs = bindings.items() if isinstance(bindings, Mapping) else bindings
    collected: dict[Any, Handler] = {}
    unhashable: list[Any] = []
    for label, handler in pairs:
        _bind(label_set, collected, unhashable, label, handler)
    return collected, unhashable


def _check_coverage(
    label_set: LabelSet,
    collected: dict[Any, Handler],
    unhashable: list[Any],
) -> dict[str, Handler]:
    """束縛のラベルがラベル集合と完全に一致することを確認する。

    存在しないラベルと未束縛のラベルが同時にある場合は
    UnknownBindingError を優先し、未束縛ラベルは missing 属性に入れる。
    """
    unknown = [label for label in collected if label not in label_set] + unhashable
    missing = [label for label in label_set if label not in collected]

    if unknown:
        logger.debug(
            "未知の束縛: domain=%s, unknown=%s, missing=%s",
            label_set.name,
            unknown,
            missing,
        )
        raise UnknownBindingError(label_set.name, unknown, missing)
    if missing:
        logger.debug("束縛漏れ: domain=%s, missing=%s", label_set.name, missing)
        raise MissingBindingError(label_set.name, missing)

    return {label: collected[label] for label in label_set}


def validate_bindings(label_set: LabelSet, bindings: Bindings) -> dict[str, Handler]:
    """束縛を検証し、ラベル集合の定義順に並べた辞書を返す。

    Args:
        label_set: 対象のラベル集合。
        bindings: {ラベル: ハンドラ} のマッピング、または (ラベル, ハンドラ) の列。

    Returns:
        ラベル → ハンドラの辞書（ラベル集合の定義順）。

    Raises:
        DuplicateBindingError: 同じラベルが二重に束縛された場合。
        UnknownBindingError: ラベル集合にないラベルが束縛された場合。
        MissingBindingError: ハンドラのないラベルがある場合。
        TypeError: ハンドラが呼び出し可能でない場合。
    """
    collected, unhashable = _collect(label_set, bindings)
    return _check_coverage(label_set, collected, unhashable)


class CaseTable:
    """検証済みの束縛を保持し、対象値ごとにハンドラを呼び出すテーブル。

    束縛の検証は生成時に1回だけ行い、以降は何度でも呼び出せる。
    """

    def __init__(self, label_set: LabelSet, bindings: Bindings) -> None:
        self._label_set = label_set
        self._handlers = validate_bindings(label_set, bindings)

    @property
    def label_set(self) -> LabelSet:
        return self._label_set

    def __call__(self, subject: Any, *args: Any, **kwargs: Any) -> Any:
        """対象値に一致するハンドラを呼び出し、その戻り値を返す。

        追加の引数はそのままハンドラに渡す。ハンドラの例外はそのまま伝播する。

        Raises:
            UnknownValueError: 対象値がラベル集合に含まれない場合。
        """
        if subject not in self._label_set:
            logger.debug("未知の値: domain=%s, value=%r", self._label_set.name, subject)
            raise UnknownValueError(self._label_set.name, subject)

        label = self._label_set.coerce(subject)
        handler = self._handlers[label]
        if isinstance(handler, Unsupported):
            raise UnsupportedCaseError(self._label_set.name, subject, handler.reason)

        logger.debug("ディスパッチ: domain=%s, label=%s", self._label_set.name, label)
        return handler(*args, **kwargs)


def match(label_set: LabelSet, subject: Any, bindings: Bindings) -> Any:
    """対象値をラベル集合に照合し、一致したラベルのハンドラの戻り値を返す。

    束縛の検証（二重・未知・漏れ）は対象値の検証より先に行う。
    ハンドラが値を返さない場合は None を返す（エラーではない）。

    Args:
        label_set: 対象のラベル集合。
        subject: 照合する値（ラベル文字列または Enum メンバー）。
        bindings: {ラベル: ハンドラ} のマッピング、または (ラベル, ハンドラ) の列。
                  二重束縛を表現できるのは後者のみ。

    Returns:
        呼び出したハンドラの戻り値。
    """
    return CaseTable(label_set, bindings)(subject)


class CaseBuilder:
    """ハンドラを1つずつ束縛してから照合するビルダー。

    使用例::

        result = (
            countries.case("DE")
            .when("US", lambda: "dollar")
            .when("DE", lambda: "euro")
            .when("GB", lambda: "pound")
            .resolve()
        )
    """

    def __init__(self, label_set: LabelSet, subject: Any) -> None:
        self._label_set = label_set
        self._subject = subject
        self._handlers: dict[Any, Handler] = {}
        self._unhashable: list[Any] = []

    def when(self, label: Any, handler: Handler) -> CaseBuilder:
        """ラベルにハンドラを束縛する。二重束縛はその場で DuplicateBindingError。"""
        _bind(self._label_set, self._handlers, self._unhashable, label, handler)
        return self

    def on(self, label: Any) -> Callable[[Handler], Handler]:
        """`when` のデコレータ版。"""

        def decorator(handler: Handler) -> Handler:
            self.when(label, handler)
            return handler

        return decorator

    def resolve(self) -> Any:
        """網羅性と対象値を検証し、一致したハンドラの戻り値を返す。"""
        _check_coverage(self._label_set, self._handlers, self._unhashable)
        return CaseTable(self._label_set, self._handlers)(self._subject)
