"""相関処理のコア.

- 正規化（raw tag → tag walk）
- タグツリー（投稿の登録、エントリによる検索）
- タイトル抽出、レポート出力
"""

from .exceptions import ConfigError, CorrelatorError, DuplicateTagWalkError
from .normalize import normalize_tag, normalize_walk
from .tag_tree import DuplicatePolicy, Post, TagTree, TagTreeNode
from .title import TitleExtraction, apply_title, extract_title

__all__ = [
    "normalize_tag",
    "normalize_walk",
    "DuplicatePolicy",
    "Post",
    "TagTree",
    "TagTreeNode",
    "TitleExtraction",
    "apply_title",
    "extract_title",
    "CorrelatorError",
    "ConfigError",
    "DuplicateTagWalkError",
]
