"""Day One エントリ / Jekyll 投稿の入力アダプタ群."""

from .base_adapter import BaseAdapter
from .dayone_adapter import DayOneAdapter, sanitize_keys
from .jekyll_adapter import JekyllPostAdapter

__all__ = [
    "BaseAdapter",
    "DayOneAdapter",
    "JekyllPostAdapter",
    "sanitize_keys",
]
