"""Tests for the command-line demo."""

import json
import logging
import sys

import pytest

from scoutsim.__main__ import main, plan_week
from scoutsim.config import set_config
from scoutsim.core.enums import ActivityType
from scoutsim.generators import build_demo_world


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers = handlers
    root.setLevel(level)
    set_config(None)


def run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["scoutsim", *args])
    main()


class TestPlanWeek:
    def test_plan(self):
        state = build_demo_world(seed="plan")

        schedule = plan_week(state)

        types = [a.activity_type if a else None for a in schedule.activities]
        assert types == [
            ActivityType.ATTEND_MATCH,
            ActivityType.ATTEND_MATCH,
            ActivityType.WRITE_REPORT,
            ActivityType.STUDY,
            None,
            None,
            ActivityType.REST,
        ]
        assert state.schedule.scheduled_count == 0


class TestMain:
    """Running the demo end to end."""

    def test_json_output(self, monkeypatch, capsys):
        run(monkeypatch, "--weeks", "2", "--seed", "cli", "--json")

        output = json.loads(capsys.readouterr().out)

        assert [w["week"] for w in output["weeks"]] == [1, 2]
        assert all(len(w["fixtures"]) == 3 for w in output["weeks"])
        assert len(output["standings"]) == 6
        assert [row["position"] for row in output["standings"]] == [1, 2, 3, 4, 5, 6]
        assert sum(row["played"] for row in output["standings"]) == 12

    def test_same_seed_same_output(self, monkeypatch, capsys):
        run(monkeypatch, "--weeks", "1", "--seed", "repeat", "--json")
        first = capsys.readouterr().out
        run(monkeypatch, "--weeks", "1", "--seed", "repeat", "--json")
        assert capsys.readouterr().out == first

    def test_table_output(self, monkeypatch, capsys):
        run(monkeypatch, "--weeks", "1", "--seed", "cli")
        assert "League Table" in capsys.readouterr().out

    def test_invalid_config(self, monkeypatch, capsys):
        with pytest.raises(SystemExit) as exc:
            run(monkeypatch, "--weeks", "0")

        assert exc.value.code == 2
        assert "SCOUTSIM_DEMO_WEEKS" in capsys.readouterr().err
