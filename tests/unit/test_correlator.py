"""Unit tests for the correlator phases."""

from typing import Any

import pytest

from dayone_correlator.config import CorrelatorConfig
from dayone_correlator.core.exceptions import DuplicateTagWalkError
from dayone_correlator.core.tag_tree import DuplicatePolicy, Post
from dayone_correlator.correlator import Correlator


def _entry(uuid: str, tags: list[str] | None, creation_date: str = "2013-01-01", text: str | None = None) -> dict:
    entry: dict[str, Any] = {"uuid": uuid, "tags": tags, "creation_date": creation_date}
    if text is not None:
        entry["entry_text"] = text
    return entry


class TestBuild:
    def test_untagged_posts_are_skipped(self) -> None:
        correlator = Correlator()
        correlator.build([Post("tagged", ["a"]), Post("untagged", []), Post("none", None)])  # type: ignore[arg-type]

        result = correlator.result()
        assert result.posts_attached == 1
        assert result.posts_skipped == 2
        assert [p.identifier for p in correlator.tree.enumerate_posts()] == ["tagged"]

    def test_duplicate_policy_from_config(self) -> None:
        correlator = Correlator(CorrelatorConfig(duplicate_policy=DuplicatePolicy.ERROR))

        with pytest.raises(DuplicateTagWalkError):
            correlator.build([Post("a", ["x"]), Post("b", ["X"])])


class TestCorrelate:
    def test_scenario_costa_rica(self) -> None:
        post = Post("monteverde", ["Costa Rica", "Monteverde"])
        e1 = _entry("e1", ["costa rica", "monteverde", "hiking"])
        e2 = _entry("e2", ["Costa Rica"])

        Correlator().run([post], [e1, e2])

        assert post.data["dayones"] == [e1]

    def test_scenario_panama(self) -> None:
        panama = Post("panama", ["Panama"])
        bocas = Post("bocas", ["Panama", "Bocas del Toro"])
        entry = _entry("e1", ["Panama", "Bocas del Toro"])

        result = Correlator().run([panama, bocas], [entry])

        assert panama.data["dayones"] == [entry]
        assert bocas.data["dayones"] == [entry]
        assert result.attachments == 2
        assert result.entries_matched == 1

    def test_scenario_untagged_post(self) -> None:
        untagged = Post("untagged", [])
        entries = [_entry("e1", ["a"]), _entry("e2", []), _entry("e3", None)]

        Correlator().run([untagged, Post("a", ["a"])], entries)

        assert "dayones" not in untagged.data

    def test_untagged_entry_matches_nothing(self) -> None:
        post = Post("a", ["a"])
        result = Correlator().run([post], [_entry("e1", None), _entry("e2", [])])

        assert "dayones" not in post.data
        assert result.entries_seen == 2
        assert result.entries_matched == 0

    def test_colliding_entry_tags_attach_once(self) -> None:
        post = Post("panama", ["Panama"])
        entry = _entry("e1", ["Panama", "panama "])

        result = Correlator().run([post], [entry])

        assert post.data["dayones"] == [entry]
        assert result.attachments == 1

    def test_entries_are_attached_unmodified_by_reference(self) -> None:
        post = Post("a", ["a"])
        entry = _entry("e1", ["A"])
        Correlator().run([post], [entry])

        assert post.data["dayones"][0] is entry

    def test_appends_to_existing_collection(self) -> None:
        existing = {"uuid": "old", "creation_date": "2012-01-01"}
        post = Post("a", ["a"], data={"dayones": [existing]})
        entry = _entry("new", ["a"], "2013-01-01")

        Correlator().run([post], [entry])

        assert post.data["dayones"] == [existing, entry]

    def test_custom_output_field(self) -> None:
        post = Post("a", ["a"])
        Correlator(CorrelatorConfig(output_field="journal")).run([post], [_entry("e1", ["a"])])

        assert "journal" in post.data
        assert "dayones" not in post.data

    def test_title_extracted_before_matching(self) -> None:
        post = Post("a", ["a"])
        entry = _entry("e1", ["a"], text="Hello.\nWorld")

        Correlator().run([post], [entry])

        assert entry["title_text"] == "Hello"
        assert entry["entry_text"] == "World"

    def test_title_extraction_disabled(self) -> None:
        entry = _entry("e1", ["a"], text="Hello.\nWorld")
        Correlator(CorrelatorConfig(extract_titles=False)).run([Post("a", ["a"])], [entry])

        assert "title_text" not in entry
        assert entry["entry_text"] == "Hello.\nWorld"

    def test_entry_without_text_gets_no_title(self) -> None:
        entry = _entry("e1", ["a"])
        Correlator().run([Post("a", ["a"])], [entry])

        assert "title_text" not in entry


class TestFinalize:
    def test_scenario_sorted_by_creation_date(self) -> None:
        post = Post("a", ["a"])
        entries = [
            _entry("jan", ["a"], "2013-01-01"),
            _entry("mar", ["a"], "2013-03-01"),
            _entry("feb", ["a"], "2013-02-01"),
        ]

        Correlator().run([post], entries)

        assert [e["creation_date"] for e in post.data["dayones"]] == ["2013-01-01", "2013-02-01", "2013-03-01"]

    def test_stable_for_equal_timestamps(self) -> None:
        post = Post("a", ["a"])
        entries = [
            _entry("second-day-1", ["a"], "2013-01-02"),
            _entry("first-day-1", ["a"], "2013-01-01"),
            _entry("second-day-2", ["a"], "2013-01-02"),
            _entry("first-day-2", ["a"], "2013-01-01"),
        ]

        Correlator().run([post], entries)

        assert [e["uuid"] for e in post.data["dayones"]] == [
            "first-day-1",
            "first-day-2",
            "second-day-1",
            "second-day-2",
        ]

    def test_missing_and_none_dates_sort_first(self) -> None:
        """作成日時が無い/None のエントリはどちらも先頭に並ぶこと."""
        post = Post("a", ["a"])
        dated = _entry("dated", ["a"], "2013-01-01")
        none = _entry("none", ["a"])
        none["creation_date"] = None
        absent = _entry("absent", ["a"])
        del absent["creation_date"]

        Correlator().run([post], [dated, none, absent])

        assert [e["uuid"] for e in post.data["dayones"]] == ["none", "absent", "dated"]


class TestHooks:
    def test_hooks_are_called(self) -> None:
        seen_entries: list[str] = []
        seen_posts: list[str] = []

        class RecordingCorrelator(Correlator):
            def should_extract_title(self, entry: dict) -> bool:
                return False

            def process_entry(self, entry: dict) -> None:
                seen_entries.append(entry["uuid"])
                entry["tags"] = ["a"]

            def process_post(self, post: Post) -> None:
                seen_posts.append(post.identifier)

        post = Post("a", ["a"])
        entry = _entry("e1", None, text="Hello.\nWorld")
        RecordingCorrelator().run([post, Post("b", ["b"])], [entry])

        assert seen_entries == ["e1"]
        assert sorted(seen_posts) == ["a", "b"]
        assert post.data["dayones"] == [entry]
        assert entry["entry_text"] == "Hello.\nWorld"
