"""Correlator exceptions.

カスタム例外クラスを定義します。
"""

from __future__ import annotations

from typing import Any


class CorrelatorError(Exception):
    """dayone_correlator の例外の基底クラス."""


class ConfigError(CorrelatorError):
    """設定ファイルが読めない/必須キーが無い/値が不正な場合の例外.

    処理開始前に検出して即座に失敗させる（エントリ読み込みより前）。
    """


class DuplicateTagWalkError(CorrelatorError):
    """同一の tag walk を持つ投稿が複数登録された場合の例外.

    DuplicatePolicy.ERROR のときのみ送出されます。

    Attributes:
        walk: 衝突した正規化済み tag walk
        existing: 既に登録されていた投稿
        incoming: 後から登録しようとした投稿
    """

    def __init__(self, walk: list[str], existing: Any, incoming: Any) -> None:
        """例外初期化.

        Args:
            walk: 衝突した tag walk
            existing: 既存の投稿
            incoming: 新しく登録しようとした投稿
        """
        self.walk = walk
        self.existing = existing
        self.incoming = incoming
        message = (
            f"Duplicate tag walk {walk}: "
            f"'{getattr(existing, 'identifier', existing)}' is already attached, "
            f"refusing '{getattr(incoming, 'identifier', incoming)}'. "
            "Set duplicate_policy to 'warn' or 'overwrite' to allow last-write-wins."
        )
        super().__init__(message)
