"""タグ正規化（raw tag → tag walk）.

Day One と Jekyll でタグの表記揺れ（大文字小文字・前後の空白）があるため、
比較前に必ずここを通して正規化する。

設計方針:
    - 正規化は lowercase + strip のみ（アンダースコア置換などはしない）
    - tag walk は正規化済みタグを昇順ソートしたもの（入力順に依存しない）
    - 空/None のタグ集合は walk を持たない（None を返す。空リストとは区別する）
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_tag(tag: str) -> str:
    """タグ1件を比較用の表記に揃える.

    Examples:
        >>> normalize_tag("  Costa Rica ")
        'costa rica'
    """
    return tag.lower().strip()


def normalize_walk(tags: Iterable[str] | None) -> list[str] | None:
    """タグ集合から tag tree を辿るための walk を生成する.

    Args:
        tags: 生タグの集合（list/set/tuple など）。None 可

    Returns:
        正規化・昇順ソート済みのタグ列。タグが無い場合は None

    Examples:
        >>> normalize_walk(["Monteverde", "costa rica "])
        ['costa rica', 'monteverde']
        >>> normalize_walk([]) is None
        True
    """
    if tags is None:
        return None

    walk = sorted(normalize_tag(tag) for tag in tags)
    if not walk:
        return None
    return walk
