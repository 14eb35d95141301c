"""ラベル集合（閉じたドメイン）定義モジュール。

国コードやステータスのように、取り得る値が固定された文字列ラベルの
集合を表す。ラベル集合はモジュールレベルの状態ではなく値として
受け渡しするため、複数のドメインが干渉せずに共存できる。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Iterable, Iterator, Mapping

from casematch import matcher
from casematch.errors import LabelSetError, UnknownValueError
from casematch.i18n import t

logger = logging.getLogger(__name__)


def _label_of(member: Enum) -> str:
    """Enum メンバーをラベル文字列に変換する（文字列値優先、なければ名前）。"""
    return member.value if isinstance(member.value, str) else member.name


@dataclass(frozen=True)
class LabelSet:
    """順序付きで重複のないラベルの集合。

    Attributes:
        name: ドメイン名（エラーメッセージとレジストリのキーに使う）。
        labels: 定義順のラベル。
        enum_cls: from_enum で生成した場合の元の Enum クラス。設定されている
            ときは、それ以外の Enum のメンバーを所属値として認めない。
    """

    name: str
    labels: tuple[str, ...]
    enum_cls: type[Enum] | None = None
    _positions: dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if isinstance(self.labels, str):
            # "USDE" のような文字列を1文字ずつのラベルとして扱わない
            raise LabelSetError(self.name, t("label_set.invalid_label", domain=self.name, label=self.labels))
        labels = tuple(self.labels)
        if not labels:
            raise LabelSetError(self.name, t("label_set.empty", domain=self.name))

        positions: dict[str, int] = {}
        duplicates: list[str] = []
        for label in labels:
            if not isinstance(label, str) or not label:
                raise LabelSetError(self.name, t("label_set.invalid_label", domain=self.name, label=label))
            if label in positions:
                if label not in duplicates:
                    duplicates.append(label)
                continue
            positions[label] = len(positions)

        if duplicates:
            raise LabelSetError(
                self.name,
                t("label_set.duplicate_labels", domain=self.name, labels=", ".join(duplicates)),
            )

        object.__setattr__(self, "labels", labels)
        object.__setattr__(self, "_positions", positions)
        logger.debug("ラベル集合を定義: %s (%d 件)", self.name, len(labels))

    @classmethod
    def from_enum(cls, enum_cls: type[Enum], name: str | None = None) -> LabelSet:
        """Enum クラスからラベル集合を生成する。

        メンバーの値が文字列ならその値を、そうでなければメンバー名をラベルとする。
        エイリアスは Enum の反復に現れないため含まれない。

        Args:
            enum_cls: 元になる Enum サブクラス。
            name: ドメイン名。None の場合は Enum クラス名を使用。

        Returns:
            生成したラベル集合。
        """
        return cls(
            name or enum_cls.__name__,
            tuple(_label_of(m) for m in enum_cls),
            enum_cls=enum_cls,
        )

    def _is_foreign_member(self, value: Any) -> bool:
        """元の Enum 以外の Enum メンバーかどうか（文字列を継承する Enum を含む）。"""
        if not isinstance(value, Enum):
            return False
        return self.enum_cls is None or not isinstance(value, self.enum_cls)

    def coerce(self, value: Any) -> Any:
        """元の Enum のメンバーをラベルに変換する。それ以外の値はそのまま返す。

        別の Enum のメンバーは変換しない。ラベル値が偶然一致していても
        所属値とはみなさない（文字列で定義したラベル集合でも同様）。
        """
        if isinstance(value, Enum) and not self._is_foreign_member(value):
            return _label_of(value)
        return value

    def __contains__(self, value: object) -> bool:
        if self._is_foreign_member(value):
            return False
        try:
            return self.coerce(value) in self._positions
        except TypeError:
            # ハッシュ不可能な値はメンバーではない
            return False

    def __iter__(self) -> Iterator[str]:
        return iter(self.labels)

    def __len__(self) -> int:
        return len(self.labels)

    def index(self, value: Any) -> int:
        """ラベルの定義順の位置を返す。

        Raises:
            UnknownValueError: ラベル集合に含まれない値の場合。
        """
        if value not in self:
            raise UnknownValueError(self.name, value)
        return self._positions[self.coerce(value)]

    def match(
        self,
        subject: Any,
        bindings: Mapping[Any, Callable[[], Any]] | Iterable[tuple[Any, Callable[[], Any]]],
    ) -> Any:
        """`matcher.match` のショートカット。"""
        return matcher.match(self, subject, bindings)

    def case(self, subject: Any) -> matcher.CaseBuilder:
        """ハンドラを1つずつ束縛する `CaseBuilder` を返す。"""
        return matcher.CaseBuilder(self, subject)
