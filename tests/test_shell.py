"""Tests for the interactive shell."""

from datetime import date

import pytest

from todolist.config import Config
from todolist.core.store import StoreEvent
from todolist.core.tasks import TaskFilter
from todolist.shell import TodoShell


@pytest.fixture
def today():
    return date(2025, 3, 15)


@pytest.fixture
def shell(today):
    return TodoShell(Config(locale="en_US"), today=today)


@pytest.fixture
def run(shell, capsys):
    """Run lines through the shell and return (stdout, stderr) of the last one."""
    def _run(*lines):
        capsys.readouterr()
        result = None
        for line in lines:
            result = shell.handle(line)
        out, err = capsys.readouterr()
        _run.last_result = result
        return out, err
    return _run


def names(store):
    return [t.name for t in store.tasks]


class TestAdd:
    def test_adds_and_redraws_list(self, shell, run):
        out, err = run('add "Write report" 2025-03-15 Work "Q1 numbers"')
        assert err == ""
        [task] = shell.store.tasks
        assert task.name == "Write report"
        assert task.due_date == date(2025, 3, 15)
        assert task.category == "Work"
        assert task.details == "Q1 numbers"
        assert "1. [ ] Write report (due 2025-03-15, Work) - Q1 numbers" in out

    def test_unknown_category(self, shell, run):
        out, err = run("add Thing 2025-03-15 Hobbies")
        assert "Unknown category 'Hobbies'" in err
        assert shell.store.tasks == []

    def test_new_category_then_add(self, shell, run):
        out, _ = run("category Hobbies", "add Paint 2025-03-16 Hobbies")
        assert names(shell.store) == ["Paint"]
        assert [c.name for c in shell.store.categories] == ["Work", "Personal", "Hobbies"]

    def test_bad_date(self, shell, run):
        _, err = run("add Thing 2025-13-01 Work")
        assert err.startswith("Error: Invalid value")
        assert shell.store.tasks == []

    def test_empty_name(self, shell, run):
        _, err = run('add "  " 2025-03-15 Work')
        assert "cannot be empty" in err


class TestRows:
    @pytest.fixture
    def filled(self, run):
        run(
            "add One 2025-03-15 Work",
            "add Two 2025-03-16 Personal",
            "add Three 2025-03-15 Work",
        )

    def test_done_toggles_row(self, shell, run, filled):
        run("done 2")
        assert [t.is_completed for t in shell.store.tasks] == [False, True, False]
        run("done 2")
        assert [t.is_completed for t in shell.store.tasks] == [False, False, False]

    def test_rm_uses_filtered_rows(self, shell, run, filled):
        run("done 1", "filter pending")
        assert shell.store.selected_filter is TaskFilter.PENDING
        run("rm 1")
        # Row 1 of the pending list was "Two", not the completed "One"
        assert names(shell.store) == ["One", "Three"]

    def test_rm_several(self, shell, run, filled):
        run("rm 3 1")
        assert names(shell.store) == ["Two"]

    def test_missing_row(self, shell, run, filled):
        _, err = run("done 7")
        assert err.strip() == "Error: No task 7"

    def test_row_zero_rejected(self, shell, run, filled):
        _, err = run("rm 0")
        assert err.startswith("Error:")
        assert len(shell.store.tasks) == 3

    def test_edit(self, shell, run, filled):
        run('edit 1 --name "One more" --due 2025-03-20 --details "see doc"')
        task = shell.store.tasks[0]
        assert task.name == "One more"
        assert task.due_date == date(2025, 3, 20)
        assert task.details == "see doc"

        run("edit 1 --clear-details")
        assert shell.store.tasks[0].details is None
        assert shell.store.tasks[0].name == "One more"

    def test_edit_conflicting_options(self, shell, run, filled):
        _, err = run("edit 1 --details x --clear-details")
        assert "mutually exclusive" in err

    def test_edit_without_changes(self, shell, run, filled):
        shell.session.events.clear()
        out, err = run("edit 1")
        assert err.strip() == "Error: Nothing to change"
        assert StoreEvent.TASK_UPDATED not in shell.session.events
        assert out == ""

    def test_show_category(self, shell, run, filled):
        out, _ = run("show Personal")
        assert "Personal | Filter: All" in out
        assert "1. [ ] Two" in out
        run("show all")
        assert shell.store.selected_category is None

    def test_show_unknown_category(self, shell, run):
        _, err = run("show Hobbies")
        assert "Unknown category" in err
        assert shell.store.selected_category is None

    def test_filter_case_insensitive(self, shell, run):
        run("filter COMPLETED")
        assert shell.store.selected_filter is TaskFilter.COMPLETED

    def test_list(self, run, filled):
        out, _ = run("list")
        assert "3. [ ] Three" in out


class TestCalendar:
    def test_cal_current_month(self, run):
        out, _ = run("add Report 2025-03-15 Work", "cal")
        assert "March 2025" in out
        assert "[15]•" in out

    def test_cal_other_month(self, run):
        out, _ = run("cal 2025-07")
        assert "July 2025" in out

    def test_next_prev(self, shell, run):
        out, _ = run("next")
        assert "April 2025" in out
        out, _ = run("prev", "prev")
        assert "February 2025" in out
        assert shell.session.month == date(2025, 2, 15)

    def test_day(self, run):
        out, _ = run("add Report 2025-03-15 Work", "day 2025-03-15")
        assert "Tasks for Saturday, March 15" in out
        assert "- Report" in out

    def test_bad_locale_reported(self, today, capsys):
        shell = TodoShell(Config(locale="xx_YY"), today=today)
        assert shell.handle("cal") is True
        assert "Unknown locale" in capsys.readouterr().err


class TestSession:
    def test_quit(self, shell, run):
        run("quit")
        assert run.last_result is False

    def test_exit_alias(self, shell, run):
        run("exit")
        assert run.last_result is False

    def test_blank_line(self, shell, run):
        out, err = run("   ")
        assert run.last_result is True
        assert out == err == ""

    def test_unknown_command(self, run):
        _, err = run("frobnicate")
        assert "No such command" in err

    def test_unbalanced_quotes(self, run):
        _, err = run('add "Write report 2025-03-15 Work')
        assert err.startswith("Error:")

    def test_help_lists_commands(self, run):
        out, _ = run("help")
        for name in ("add", "done", "rm", "filter", "show", "cal", "day", "quit"):
            assert f"  {name}" in out

    def test_records_store_events(self, shell, run):
        run("add A 2025-03-15 Work", "category X", "filter pending")
        assert shell.session.events == [
            StoreEvent.TASK_ADDED,
            StoreEvent.CATEGORY_ADDED,
            StoreEvent.FILTER_CHANGED,
        ]

    def test_seed_from_config(self, today):
        shell = TodoShell(Config(default_categories=["Home"]), today=today)
        assert [c.name for c in shell.store.categories] == ["Home"]
