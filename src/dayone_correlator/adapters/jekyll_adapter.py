"""JekyllPostAdapter for reading Jekyll posts.

This adapter reads the YAML front matter of each post under a `_posts` directory
and turns it into a `Post` whose `data` is the front matter itself.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

import yaml
from loguru import logger

from dayone_correlator.core.tag_tree import Post

from .base_adapter import BaseAdapter

_FRONT_MATTER = re.compile(r"\A---[ \t]*\r?\n(.*?)^---[ \t]*$", re.MULTILINE | re.DOTALL)

POST_SUFFIXES = (".md", ".markdown", ".html")


def parse_front_matter(text: str) -> dict[str, Any] | None:
    """Return the front matter mapping, or None when the file has none."""
    match = _FRONT_MATTER.match(text)
    if match is None:
        return None

    data = yaml.safe_load(match.group(1))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError("Front matter must be a YAML mapping")
    return data


def split_tags(value: object) -> list[str]:
    """Read tags the way Jekyll does: a YAML list, or a whitespace separated string."""
    if value is None:
        return []
    if isinstance(value, str):
        return value.split()
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


class JekyllPostAdapter(BaseAdapter):
    """Adapter for Jekyll posts.

    Args:
        posts_dir: Path to the `_posts` directory
    """

    def __init__(self, posts_dir: Path | str) -> None:
        """Initialize adapter.

        Args:
            posts_dir: Path to the `_posts` directory

        Raises:
            FileNotFoundError: posts directory does not exist
        """
        self.posts_dir = Path(posts_dir)
        if not self.posts_dir.is_dir():
            raise FileNotFoundError(f"Posts directory not found: {self.posts_dir}")

    def read(self) -> list[Post]:
        """Read every post with front matter.

        Returns:
            Posts in file name order

        Raises:
            ValueError: Failed to parse front matter
        """
        posts: list[Post] = []
        paths = sorted(p for p in self.posts_dir.rglob("*") if p.is_file() and p.suffix in POST_SUFFIXES)
        for path in paths:
            try:
                data = parse_front_matter(path.read_text(encoding="utf-8"))
            except (yaml.YAMLError, ValueError) as e:
                raise ValueError(f"Failed to read front matter: {path}") from e

            if data is None:
                logger.debug(f"Skipping file without front matter: {path}")
                continue

            tags = split_tags(data.get("tags")) + split_tags(data.get("tag"))
            posts.append(Post(identifier=path.stem, tags=tags, data=data))

        logger.info(f"Loaded {len(posts)} Jekyll posts from {self.posts_dir}")
        return posts

    def validate(self, records: list[Post]) -> bool:
        """Validate that post identifiers are unique."""
        identifiers = [post.identifier for post in records]
        return len(identifiers) == len(set(identifiers))
