"""ドメインレジストリモジュール。

名前付きのラベル集合を複数並べて保持する。グローバル状態は持たず、
レジストリ自体を呼び出し側が受け渡す。
"""

from __future__ import annotations

import logging
from typing import Iterator

from casematch.config import AppConfig
from casematch.errors import LabelSetError
from casematch.i18n import t
from casematch.label_set import LabelSet

logger = logging.getLogger(__name__)


class DomainRegistry:
    """ドメイン名 → LabelSet の対応を保持するクラス。"""

    def __init__(self) -> None:
        self._domains: dict[str, LabelSet] = {}

    @classmethod
    def from_config(cls, config: AppConfig) -> DomainRegistry:
        """設定の domains セクションからレジストリを構築する。

        Raises:
            LabelSetError: ラベル定義が不正な場合。
        """
        registry = cls()
        for name, labels in config.domains.items():
            registry.register(LabelSet(name, tuple(labels)))
        logger.info("ドメインを登録しました: %s", ", ".join(registry.names()) or "(なし)")
        return registry

    def register(self, label_set: LabelSet) -> LabelSet:
        """ラベル集合を登録する。

        同じ名前・同じラベルでの再登録は何もしない。

        Raises:
            LabelSetError: 同名のドメインが異なるラベルで登録済みの場合。
        """
        existing = self._domains.get(label_set.name)
        if existing is not None:
            if existing.labels != label_set.labels:
                raise LabelSetError(label_set.name, t("domains.conflict", domain=label_set.name))
            return existing
        self._domains[label_set.name] = label_set
        logger.debug("ドメイン登録: %s %s", label_set.name, label_set.labels)
        return label_set

    def get(self, name: str) -> LabelSet:
        """名前からラベル集合を取得する。

        Raises:
            KeyError: 未登録のドメイン名の場合。
        """
        try:
            return self._domains[name]
        except KeyError:
            raise KeyError(t("domains.not_found", domain=name, known=", ".join(self._domains))) from None

    def names(self) -> list[str]:
        """登録順のドメイン名一覧を返す。"""
        return list(self._domains)

    def __contains__(self, name: object) -> bool:
        return name in self._domains

    def __len__(self) -> int:
        return len(self._domains)

    def __iter__(self) -> Iterator[LabelSet]:
        return iter(self._domains.values())
