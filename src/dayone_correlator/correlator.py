"""Day One エントリと Jekyll 投稿の相関処理（オーケストレーター）.

投稿の必須タグからタグツリーを構築し、各エントリのタグでツリーを検索して、
マッチした投稿の data["dayones"] にエントリを追加する。最後に投稿ごとのエントリを作成日時順に並べる。

フェーズは必ず build → correlate → finalize の順で実行する（ツリーの変更と検索は重ならない）。
フックを差し替えたい場合は Correlator を継承して process_entry / process_post /
should_extract_title を上書きする。
"""

from __future__ import annotations

import argparse
import json
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from dayone_correlator.adapters.dayone_adapter import DayOneAdapter
from dayone_correlator.adapters.jekyll_adapter import JekyllPostAdapter
from dayone_correlator.config import CorrelatorConfig, load_config
from dayone_correlator.core.report import export_correlation_report
from dayone_correlator.core.tag_tree import Post, TagTree
from dayone_correlator.core.title import apply_title


def creation_sort_key(entry: dict[str, Any], creation_field: str = "creation_date") -> str:
    """作成日時の並べ替えキー（キー無しと None はどちらも空文字として先頭に並ぶ）."""
    value = entry.get(creation_field)
    return "" if value is None else str(value)


@dataclass(frozen=True)
class CorrelationResult:
    """相関処理の集計."""

    posts_attached: int
    posts_skipped: int
    entries_seen: int
    entries_matched: int
    attachments: int


class Correlator:
    """エントリを投稿に紐付ける.

    Args:
        config: 相関処理の設定（フィールド名、重複時のポリシーなど）
    """

    def __init__(self, config: CorrelatorConfig | None = None) -> None:
        self.config = config or CorrelatorConfig()
        self.tree = TagTree(self.config.duplicate_policy)
        self._posts_attached = 0
        self._posts_skipped = 0
        self._entries_seen = 0
        self._entries_matched = 0
        self._attachments = 0

    # ------------------------------------------------------------------
    # フック（継承して上書きする）
    # ------------------------------------------------------------------

    def should_extract_title(self, entry: dict[str, Any]) -> bool:
        """エントリ本文の1行目をタイトルとして抽出するかどうか."""
        return self.config.extract_titles and self.config.text_field in entry

    def process_entry(self, entry: dict[str, Any]) -> None:
        """タイトル抽出後、ツリー検索前に各エントリに対して呼ばれる."""

    def process_post(self, post: Post) -> None:
        """全エントリの紐付けと並べ替えが終わった後、各投稿に対して呼ばれる."""

    # ------------------------------------------------------------------
    # フェーズ
    # ------------------------------------------------------------------

    def build(self, posts: Iterable[Post]) -> None:
        """投稿をタグツリーに登録する（タグの無い投稿は除外）."""
        logger.info("Building tag tree")
        for post in posts:
            if self.tree.add_post(post) is None:
                logger.debug(f"Skipping post without tags: {post.identifier}")
                self._posts_skipped += 1
                continue
            self._posts_attached += 1

    def correlate(self, entries: Iterable[dict[str, Any]]) -> None:
        """エントリを入力順に検索し、マッチした投稿に追加する."""
        logger.info("Correlating Day One entries with Jekyll posts")
        field = self.config.output_field
        for entry in entries:
            self._entries_seen += 1

            if self.should_extract_title(entry):
                apply_title(entry, self.config.text_field, self.config.title_field)
            self.process_entry(entry)

            posts = self.tree.query(entry.get(self.config.tags_field))
            if not posts:
                continue

            self._entries_matched += 1
            for post in posts:
                post.data.setdefault(field, []).append(entry)
                self._attachments += 1

    def finalize(self) -> None:
        """投稿ごとのエントリを作成日時（文字列比較）の昇順に並べる（安定ソート）."""
        logger.info("Sorting Day One entries")
        field = self.config.output_field
        creation_field = self.config.creation_field
        for post in self.tree.enumerate_posts():
            entries = post.data.get(field)
            if entries:
                entries.sort(key=lambda entry: creation_sort_key(entry, creation_field))
            self.process_post(post)

    def result(self) -> CorrelationResult:
        return CorrelationResult(
            posts_attached=self._posts_attached,
            posts_skipped=self._posts_skipped,
            entries_seen=self._entries_seen,
            entries_matched=self._entries_matched,
            attachments=self._attachments,
        )

    def run(self, posts: Iterable[Post], entries: Iterable[dict[str, Any]]) -> CorrelationResult:
        """build → correlate → finalize を順に実行する.

        Args:
            posts: Jekyll 投稿
            entries: Day One エントリ（辞書）

        Returns:
            処理件数の集計
        """
        self.build(posts)
        self.correlate(entries)
        self.finalize()

        result = self.result()
        logger.info(
            f"Done: {result.entries_matched}/{result.entries_seen} entries matched, "
            f"{result.attachments} attachments across {result.posts_attached} posts"
        )
        return result


def correlate_site(
    config: CorrelatorConfig,
    posts_dir: Path | str,
    output_path: Path | str | None = None,
    report_dir: Path | str | None = None,
) -> list[Post]:
    """設定とディレクトリから投稿/エントリを読み込み、相関処理を実行する.

    Args:
        config: load_config() で読み込んだ設定（dayone_path 必須）
        posts_dir: Jekyll の _posts ディレクトリ
        output_path: 投稿ごとの data を書き出す JSON のパス（任意）
        report_dir: correlations.csv の出力先（任意）

    Returns:
        相関処理済みの投稿
    """
    if config.dayone_path is None:
        raise ValueError("config.dayone_path is required")

    post_adapter = JekyllPostAdapter(posts_dir)
    posts = post_adapter.read()
    if not post_adapter.validate(posts):
        logger.warning(f"Duplicate post identifiers under {posts_dir}; JSON output keeps only the last one")

    entry_adapter = DayOneAdapter(config.dayone_path)
    entries = entry_adapter.read()
    if not entry_adapter.validate(entries):
        logger.warning("Some Day One entries have no creation date; they sort first")

    correlator = Correlator(config)
    correlator.run(posts, entries)

    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {post.identifier: post.data for post in posts}
        with open(output_path, "w", encoding="utf-8") as f:
            json.dump(payload, f, ensure_ascii=False, indent=2, default=str)
        logger.info(f"Wrote correlated posts to {output_path}")

    if report_dir is not None:
        report_path = export_correlation_report(
            posts,
            report_dir,
            config.output_field,
            creation_field=config.creation_field,
            title_field=config.title_field,
        )
        if report_path is None:
            logger.info("No correlations to report")
        else:
            logger.info(f"Wrote correlation report to {report_path}")

    return posts


def main() -> None:
    """CLI エントリポイント."""
    parser = argparse.ArgumentParser(description="Attach Day One entries to Jekyll posts by tag")
    parser.add_argument(
        "--config",
        type=Path,
        required=True,
        help="config.yml containing the dayonepath key",
    )
    parser.add_argument(
        "--posts",
        type=Path,
        required=True,
        help="Jekyll _posts directory",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output JSON file (post identifier -> front matter with attached entries)",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=None,
        help="Optional report output directory (correlations.csv)",
    )
    parser.add_argument(
        "--no-titles",
        action="store_true",
        help="Do not extract titles from the first line of entries",
    )

    args = parser.parse_args()

    config = load_config(args.config)
    if args.no_titles:
        config.extract_titles = False

    correlate_site(
        config,
        posts_dir=args.posts,
        output_path=args.output,
        report_dir=args.report_dir,
    )


if __name__ == "__main__":
    main()
