"""Day One エントリ本文からのタイトル抽出.

タイトルは本文の最初の文。ただしその文が段落の一部（改行を挟まずに続く）の場合は抽出しない。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class TitleExtraction:
    title: str | None
    body: str


def extract_title(text: str | None) -> TitleExtraction:
    """本文をタイトルと残りに分割する.

    判定ルール（本文は先に strip する）:
        - 最初の改行が最初のピリオドより前: 改行までをタイトルにする
        - 最初のピリオドの直後が最初の改行: ピリオドまでをタイトルにする
        - ピリオドが無く改行だけある: 改行までをタイトルにする
        - それ以外: タイトル無し（本文はそのまま）

    Examples:
        >>> extract_title("Hello.\\nWorld")
        TitleExtraction(title='Hello', body='World')
        >>> extract_title("Hello World")
        TitleExtraction(title=None, body='Hello World')
    """
    text = (text or "").strip()

    first_period = text.find(".")
    first_newline = text.find("\n")

    if first_newline == -1:
        return TitleExtraction(title=None, body=text)

    if first_period == -1 or first_newline < first_period:
        return TitleExtraction(title=text[:first_newline], body=text[first_newline + 1 :].strip())

    if first_period == first_newline - 1:
        return TitleExtraction(title=text[:first_period], body=text[first_period + 1 :].strip())

    return TitleExtraction(title=None, body=text)


def apply_title(entry: dict[str, Any], text_field: str = "entry_text", title_field: str = "title_text") -> None:
    """エントリ辞書の本文を書き換え、タイトルを title_field に設定する（in-place）."""
    extraction = extract_title(entry.get(text_field))
    entry[text_field] = extraction.body
    entry[title_field] = extraction.title
