"""Day One ジャーナル読み込みアダプタ.

Day One の Journal.dayone ディレクトリから entries/*.doentry（plist）を読み込み、
テンプレートから扱いやすい辞書に整形します。

整形内容:
    - キーを小文字化し、空白を "_" に置換する（"Creation Date" → "creation_date"）
    - photos/<uuid>.jpg の有無を has_pic に設定する
    - creation_date を ISO-8601 文字列にする（ソートは文字列比較で行うため）
"""

from __future__ import annotations

import plistlib
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger

from .base_adapter import BaseAdapter


def sanitize_keys(document: dict[str, Any]) -> dict[str, Any]:
    """辞書のキーを再帰的に小文字化し、空白を "_" に置換する."""
    sanitized: dict[str, Any] = {}
    for key, value in document.items():
        new_key = str(key).lower().replace(" ", "_")
        if isinstance(value, dict):
            sanitized[new_key] = sanitize_keys(value)
        else:
            sanitized[new_key] = value
    return sanitized


def format_creation_date(value: object) -> str | None:
    """creation_date を比較可能な文字列にする（naive datetime は UTC とみなす）."""
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    return str(value)


class DayOneAdapter(BaseAdapter):
    """Day One ジャーナルのアダプタ.

    Args:
        dayone_path: Journal.dayone ディレクトリのパス
    """

    ENTRIES_DIR = "entries"
    PHOTOS_DIR = "photos"

    def __init__(self, dayone_path: Path | str) -> None:
        """アダプタ初期化.

        Args:
            dayone_path: Journal.dayone ディレクトリのパス

        Raises:
            FileNotFoundError: ディレクトリが存在しない場合
        """
        self.dayone_path = Path(dayone_path)
        if not self.dayone_path.is_dir():
            raise FileNotFoundError(f"Day One directory not found: {self.dayone_path}")

    def entry_files(self) -> list[Path]:
        """entries/*.doentry をパス順で返す."""
        return sorted((self.dayone_path / self.ENTRIES_DIR).glob("*.doentry"))

    def read_entry(self, entry_path: Path) -> dict[str, Any]:
        """.doentry を1件読み込んで整形する.

        Raises:
            ValueError: plist として読み込めない場合
        """
        try:
            with open(entry_path, "rb") as f:
                raw = plistlib.load(f)
        except Exception as e:
            raise ValueError(f"Failed to read Day One entry: {entry_path}") from e

        if not isinstance(raw, dict):
            raise ValueError(f"Day One entry must be a dictionary: {entry_path}")

        doc = sanitize_keys(raw)

        uuid = doc.get("uuid")
        doc["has_pic"] = bool(uuid) and (self.dayone_path / self.PHOTOS_DIR / f"{uuid}.jpg").exists()
        doc["creation_date"] = format_creation_date(doc.get("creation_date"))
        return doc

    def read(self) -> list[dict[str, Any]]:
        """全エントリを読み込む.

        Returns:
            整形済みエントリ辞書のリスト（ファイルパス順）
        """
        entries = [self.read_entry(path) for path in self.entry_files()]
        logger.info(f"Loaded {len(entries)} Day One entries from {self.dayone_path}")
        return entries

    def validate(self, records: list[dict[str, Any]]) -> bool:
        """全エントリが creation_date を持つか検証する."""
        return all(record.get("creation_date") is not None for record in records)
