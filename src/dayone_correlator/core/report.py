"""相関結果の出力（レポート）.

投稿ごとに紐付いたエントリを1行ずつ CSV として出力します。
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import polars as pl

from .tag_tree import Post

REPORT_SCHEMA = {
    "post": pl.String,
    "uuid": pl.String,
    "creation_date": pl.String,
    "title": pl.String,
}


def build_correlation_frame(
    posts: Iterable[Post],
    field: str = "dayones",
    creation_field: str = "creation_date",
    title_field: str = "title_text",
) -> pl.DataFrame:
    """投稿と紐付いたエントリの対応表を作る.

    Args:
        posts: 相関処理済みの投稿
        field: エントリが格納されている data のキー
        creation_field: エントリの作成日時のキー
        title_field: エントリのタイトルのキー

    Returns:
        post, uuid, creation_date, title 列の DataFrame（投稿順・エントリの並び順のまま）
    """
    rows: list[dict[str, str | None]] = []
    for post in posts:
        for entry in post.data.get(field) or []:
            uuid = entry.get("uuid")
            creation_date = entry.get(creation_field)
            rows.append(
                {
                    "post": post.identifier,
                    "uuid": None if uuid is None else str(uuid),
                    "creation_date": None if creation_date is None else str(creation_date),
                    "title": entry.get(title_field),
                }
            )

    return pl.DataFrame(rows, schema=REPORT_SCHEMA)


def export_correlation_report(
    posts: Iterable[Post],
    output_dir: Path | str,
    field: str = "dayones",
    creation_field: str = "creation_date",
    title_field: str = "title_text",
) -> Path | None:
    """相関レポートを CSV ファイルとして出力する.

    Args:
        posts: 相関処理済みの投稿
        output_dir: 出力ディレクトリ（無ければ作成する）
        field: エントリが格納されている data のキー
        creation_field: エントリの作成日時のキー
        title_field: エントリのタイトルのキー

    Returns:
        出力した correlations.csv のパス（マッチが1件も無ければ None）
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    frame = build_correlation_frame(posts, field, creation_field, title_field)
    if len(frame) == 0:
        return None

    report_path = output_dir / "correlations.csv"
    frame.write_csv(report_path)
    return report_path
