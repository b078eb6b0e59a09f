"""タグツリー（投稿の必須タグ集合による trie）.

投稿ごとの必須タグを正規化・ソートした walk をパスとして trie を構築し、
エントリのタグ集合で幅優先に辿ることで「必須タグが全てエントリに含まれる投稿」を列挙する。

- ノードは children と post スロットを持つ（番兵キーは使わない）
- 構築（add_post）とクエリ（query）は同時に行わない前提
- 同じ walk を持つ投稿の扱いは DuplicatePolicy で選択する
"""

from __future__ import annotations

from collections import deque
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from loguru import logger

from .exceptions import DuplicateTagWalkError
from .normalize import normalize_walk


class DuplicatePolicy(str, Enum):
    """同一 walk への二重登録時の挙動."""

    OVERWRITE = "overwrite"
    WARN = "warn"
    ERROR = "error"


@dataclass(eq=False)
class Post:
    """Jekyll 投稿（マッチ結果の格納先）.

    Args:
        identifier: 投稿の識別子（ファイル名の stem など）
        tags: 必須タグ（生表記）
        data: 出力先の可変辞書。マッチしたエントリは data[output_field] に追加される
    """

    identifier: str
    tags: list[str] = field(default_factory=list)
    data: dict[str, Any] = field(default_factory=dict)


@dataclass(eq=False)
class TagTreeNode:
    children: dict[str, TagTreeNode] = field(default_factory=dict)
    post: Post | None = None


class TagTree:
    """投稿を tag walk の位置に配置する trie.

    Examples:
        >>> tree = TagTree()
        >>> post = Post("monteverde", ["Costa Rica", "Monteverde"])
        >>> _ = tree.add_post(post)
        >>> tree.query(["monteverde", "hiking", "costa rica"]) == [post]
        True
    """

    def __init__(self, duplicate_policy: DuplicatePolicy = DuplicatePolicy.WARN) -> None:
        self.root = TagTreeNode()
        self.duplicate_policy = DuplicatePolicy(duplicate_policy)

    def attach(self, tags: Iterable[str] | None) -> TagTreeNode | None:
        """tag walk を辿り、必要ならノードを作成して到達ノードを返す.

        Args:
            tags: 投稿の必須タグ

        Returns:
            walk の終端ノード。タグが無い場合は None（呼び出し側で投稿をスキップする）
        """
        walk = normalize_walk(tags)
        if walk is None:
            return None

        node = self.root
        for tag in walk:
            child = node.children.get(tag)
            if child is None:
                child = TagTreeNode()
                node.children[tag] = child
            node = child
        return node

    def add_post(self, post: Post) -> TagTreeNode | None:
        """投稿をツリーに登録する.

        Returns:
            投稿を配置したノード。タグの無い投稿は登録せず None

        Raises:
            DuplicateTagWalkError: duplicate_policy が ERROR で、同じ walk に既に投稿がある場合
        """
        node = self.attach(post.tags)
        if node is None:
            return None

        existing = node.post
        if existing is not None and existing is not post:
            walk = normalize_walk(post.tags) or []
            if self.duplicate_policy is DuplicatePolicy.ERROR:
                raise DuplicateTagWalkError(walk, existing, post)
            if self.duplicate_policy is DuplicatePolicy.WARN:
                logger.warning(
                    f"Post '{post.identifier}' replaces '{existing.identifier}' at tag walk {walk}"
                )

        node.post = post
        return node

    def query(self, tags: Iterable[str] | None) -> list[Post]:
        """エントリのタグで幅優先に辿り、触れたノードの投稿を全て返す.

        各ノードで walk の全タグを試す。trie のパスは昇順ソート済みの walk から作られているため、
        辿れるのは walk の部分列に対応するパスだけになる。

        Args:
            tags: エントリのタグ

        Returns:
            マッチした投稿のリスト（発見順。投稿属性での順序は保証しない）
        """
        walk = normalize_walk(tags)
        if walk is None:
            return []

        # 正規化後に同じになるタグ（"Panama" と "panama "）で同じ子を二重に積まない
        unique_tags = list(dict.fromkeys(walk))

        posts: list[Post] = []
        queue: deque[TagTreeNode] = deque([self.root])
        while queue:
            node = queue.popleft()
            if node.post is not None:
                posts.append(node.post)

            for tag in unique_tags:
                child = node.children.get(tag)
                if child is not None:
                    queue.append(child)

        return posts

    def enumerate_posts(self) -> Iterator[Post]:
        """ツリー上の全投稿を1回ずつ返す（深さ優先、明示スタック）."""
        stack = [self.root]
        while stack:
            node = stack.pop()
            if node.post is not None:
                yield node.post
            # 挿入順に辿るため逆順で積む
            stack.extend(reversed(list(node.children.values())))

    def __len__(self) -> int:
        return sum(1 for _ in self.enumerate_posts())
