"""Tests for core task logic."""

from datetime import date, datetime, time

import pytest

from todolist.core.tasks import (
    Category,
    Task,
    TaskFilter,
    filter_by_category,
    filter_by_status,
    filter_pending_on,
)


# Fixtures
@pytest.fixture
def today():
    return date(2025, 3, 15)


@pytest.fixture
def sample_tasks(today):
    """Sample tasks covering both statuses and categories."""
    return [
        Task(name="Write report", due_date=today, category="Work"),
        Task(name="Buy milk", due_date=today, category="Personal", is_completed=True),
        Task(name="Plan sprint", due_date=date(2025, 3, 17), category="Work", is_completed=True),
        Task(name="Call mom", due_date=datetime.combine(today, time(18, 30)), category="Personal"),
    ]


class TestTask:
    def test_defaults(self, today):
        task = Task(name="Test", due_date=today, category="Work")
        assert task.is_completed is False
        assert task.details is None

    def test_ids_are_unique(self, today):
        a = Task(name="A", due_date=today, category="Work")
        b = Task(name="A", due_date=today, category="Work")
        assert a.id != b.id

    def test_is_due_on_ignores_time_of_day(self, today):
        task = Task(name="Test", due_date=datetime.combine(today, time(23, 59)), category="Work")
        assert task.is_due_on(today) is True
        assert task.is_due_on(datetime.combine(today, time(0, 1))) is True
        assert task.is_due_on(date(2025, 3, 16)) is False

    def test_is_pending_on_excludes_completed(self, today):
        task = Task(name="Test", due_date=today, category="Work", is_completed=True)
        assert task.is_pending_on(today) is False


class TestCategory:
    def test_duplicate_names_get_distinct_ids(self):
        a = Category(name="Work")
        b = Category(name="Work")
        assert a.name == b.name
        assert a.id != b.id


class TestTaskFilter:
    def test_display_values(self):
        assert [f.value for f in TaskFilter] == ["All", "Pending", "Completed"]

    @pytest.mark.parametrize("raw,expected", [
        ("All", TaskFilter.ALL),
        ("pending", TaskFilter.PENDING),
        (" COMPLETED ", TaskFilter.COMPLETED),
        (TaskFilter.PENDING, TaskFilter.PENDING),
    ])
    def test_parse(self, raw, expected):
        assert TaskFilter.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown filter"):
            TaskFilter.parse("done")


class TestFilterByStatus:
    def test_all_keeps_everything_in_order(self, sample_tasks):
        assert filter_by_status(sample_tasks, TaskFilter.ALL) == sample_tasks

    def test_pending(self, sample_tasks):
        result = filter_by_status(sample_tasks, TaskFilter.PENDING)
        assert [t.name for t in result] == ["Write report", "Call mom"]

    def test_completed(self, sample_tasks):
        result = filter_by_status(sample_tasks, TaskFilter.COMPLETED)
        assert [t.name for t in result] == ["Buy milk", "Plan sprint"]

    def test_does_not_mutate_input(self, sample_tasks):
        before = list(sample_tasks)
        filter_by_status(sample_tasks, TaskFilter.PENDING)
        assert sample_tasks == before


class TestFilterByCategory:
    def test_none_keeps_everything(self, sample_tasks):
        result = filter_by_category(sample_tasks, None)
        assert result == sample_tasks
        assert result is not sample_tasks

    def test_exact_match(self, sample_tasks):
        result = filter_by_category(sample_tasks, "Work")
        assert [t.name for t in result] == ["Write report", "Plan sprint"]

    def test_is_case_sensitive(self, sample_tasks):
        assert filter_by_category(sample_tasks, "work") == []


class TestFilterPendingOn:
    def test_same_day_any_time(self, sample_tasks, today):
        result = filter_pending_on(sample_tasks, today)
        assert [t.name for t in result] == ["Write report", "Call mom"]

    def test_other_day(self, sample_tasks):
        # Plan sprint is due on the 17th but completed
        assert filter_pending_on(sample_tasks, date(2025, 3, 17)) == []

    def test_empty(self, today):
        assert filter_pending_on([], today) == []
