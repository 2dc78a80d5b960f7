"""Tests for keyword search."""
import pytest

from alchemist.models.dataset import Dataset
from alchemist.models.entities import Client, Task, Worker
from alchemist.search import KeywordMode, search


@pytest.fixture
def people():
    return Dataset(
        clients=[
            Client("C1", "Acme", 1, "", "GroupA"),
            Client("C2", "Globex", 3, "", "GroupB"),
            Client("C3", "Initech", 5, "", "GroupA"),
            Client("C4", "Umbrella", 5, "", "GroupC"),
            Client("C5", "Stark", 2, "", "GroupB"),
        ],
        workers=[
            Worker("W1", "Alice", "coding,analysis", "[1]", 1, "GroupA", 5),
            Worker("W2", "Bob", "coding", "[1]", 1, "GroupB", 2),
            Worker("W3", "Carol", "design", "[1]", 1, "GroupA", 4),
        ],
        tasks=[
            Task("T1", "Build API", "Dev", 4, "coding", "", 1),
            Task("T2", "Mockups", "Design", 1, "design", "", 1),
            Task("T3", "Review", "QA", 2, "testing", "", 1),
        ],
    )


def _ids(rows):
    return [r.key for r in rows]


class TestSearch:
    """Tests for search()."""

    def test_blank_query_returns_everything(self, people):
        result = search("   ", people)
        assert result.counts() == people.counts()
        assert result.triggers == []

    def test_high_priority_clients(self, people):
        result = search("high priority clients", people)
        assert _ids(result.clients) == ["C3", "C4"]
        assert "high priority" in result.triggers

    def test_low_priority(self, people):
        assert _ids(search("low priority", people).clients) == ["C1", "C5"]

    def test_priority_number(self, people):
        assert _ids(search("priority 3", people).clients) == ["C2"]

    def test_name_substring_case_insensitive(self, people):
        result = search("ACME", people)
        assert _ids(result.clients) == ["C1"]
        assert result.workers == []
        assert result.tasks == []

    def test_expert_workers(self, people):
        assert _ids(search("expert workers", people).workers) == ["W1", "W3"]

    def test_duration_triggers(self, people):
        assert _ids(search("long duration tasks", people).tasks) == ["T1"]
        assert _ids(search("short duration tasks", people).tasks) == ["T2", "T3"]

    def test_skill_keyword(self, people):
        result = search("workers with coding skills", people)
        assert _ids(result.workers) == ["W1", "W2"]
        assert _ids(result.tasks) == ["T1"]
        assert "skill:coding" in result.triggers

    def test_group_keyword(self, people):
        result = search("group a", people)
        assert _ids(result.clients) == ["C1", "C3"]
        assert _ids(result.workers) == ["W1", "W3"]

    def test_group_needs_word_boundary(self, people):
        result = search("group abc", people)
        assert not any(t.startswith("group:") for t in result.triggers)

    def test_combined_triggers_all(self, people):
        result = search("group a coding workers", people)
        assert _ids(result.workers) == ["W1"]

    def test_combined_triggers_last_wins(self, people):
        result = search("group a coding workers", people, mode=KeywordMode.LAST)
        assert _ids(result.workers) == ["W1", "W3"]

    def test_does_not_mutate_dataset(self, people):
        before = people.counts()
        search("high priority", people)
        assert people.counts() == before
