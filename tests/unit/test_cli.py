"""
Tests for the replay CLI.
"""

import io
import json

import pytest

from evstats.cli import main, replay
from evstats.clock import ManualClock
from evstats.core.statistic import EventCounter, EventStat
from evstats.errors import ReplayError

SAMPLE = """\
# two events, one of them repeated an hour later
1 e1
10 e1
10 e2

3601 e2
"""


class TestReplay:
    def test_replays_lines_in_order(self):
        counter = replay(io.StringIO(SAMPLE))
        assert counter.stats() == [EventStat("e1", 2, 1), EventStat("e2", 2, 2)]
        assert counter.clock.now().timestamp() == 3601

    def test_move_marker_advances_clock_only(self):
        counter = replay(["1 e", "@ 3601"])
        assert counter.stats() == [EventStat("e", 1, 0)]

    def test_names_may_contain_spaces(self):
        counter = replay(["5 user signed in"])
        assert counter.list_rates() == [("user signed in", 1 / 60)]

    def test_empty_input_gives_empty_counter(self):
        assert replay([]).list_rates() == []

    def test_existing_counter_is_extended(self):
        counter = EventCounter(ManualClock(0))
        counter.record_event("before")
        assert replay(["20 after"], counter) is counter
        assert [name for name, _ in counter.list_rates()] == ["before", "after"]

    def test_existing_counter_needs_manual_clock(self):
        with pytest.raises(ReplayError):
            replay(["1 e"], EventCounter())

    @pytest.mark.parametrize(
        "line",
        ["abc e", "42", "@", "@ soon", "nan e", "inf e", "-inf e", "1e20 e", "@ nan", "@ 1e20"],
    )
    def test_malformed_lines(self, line):
        with pytest.raises(ReplayError) as excinfo:
            replay(["1 ok", line])
        assert excinfo.value.line_no == 2
        assert excinfo.value.data["line"] == line

    @pytest.mark.parametrize("line", ["nan e", "1e20 e", "-1e20 e"])
    def test_unrepresentable_first_timestamp(self, line):
        with pytest.raises(ReplayError) as excinfo:
            replay([line])
        assert excinfo.value.line_no == 1

    def test_timestamps_must_not_go_backwards(self):
        with pytest.raises(ReplayError) as excinfo:
            replay(["10 e", "5 e"])
        assert "backwards" in excinfo.value.message
        assert excinfo.value.data["line"] == "5 e"


class TestMain:
    def test_prints_report(self, tmp_path, capsys):
        path = tmp_path / "events.txt"
        path.write_text(SAMPLE, encoding="utf-8")

        assert main([str(path)]) == 0
        assert capsys.readouterr().out == (
            "e1 | total = 2 | in last hour = 1\n"
            "e2 | total = 2 | in last hour = 2\n"
        )

    def test_rates_flag(self, tmp_path, capsys):
        path = tmp_path / "events.txt"
        path.write_text(SAMPLE, encoding="utf-8")

        assert main([str(path), "--rates", "--log-level", "error"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[-2:] == ["e1 0.016667", "e2 0.033333"]

    def test_reads_stdin(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 from-stdin\n"))
        assert main([]) == 0
        assert capsys.readouterr().out == "from-stdin | total = 1 | in last hour = 1\n"

    @pytest.mark.parametrize("bad", ["not-a-time e", "nan e", "inf e", "1e20 e"])
    def test_bad_input_exits_with_error(self, tmp_path, capsys, bad):
        path = tmp_path / "events.txt"
        path.write_text(f"10 e\n{bad}\n", encoding="utf-8")

        assert main([str(path)]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "REPLAY_ERROR" in captured.err
        payload = json.loads(captured.err.strip().splitlines()[-1])
        assert payload["status"] == "rejected"
        assert payload["data"]["line_no"] == 2

    def test_bad_stdin_exits_with_error(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 e\nnan e\n"))
        assert main([]) == 1
        err = capsys.readouterr().err
        assert "REPLAY_ERROR" in err
        assert "Cannot read" not in err

    def test_unknown_log_level_is_a_usage_error(self, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--log-level", "loud"])
        assert excinfo.value.code == 2
        assert "invalid choice" in capsys.readouterr().err

    def test_log_level_is_case_insensitive(self, monkeypatch, capsys):
        monkeypatch.setattr("sys.stdin", io.StringIO("1 e\n"))
        assert main(["--log-level", "success"]) == 0
        assert capsys.readouterr().out == "e | total = 1 | in last hour = 1\n"

    def test_missing_file(self, tmp_path, capsys):
        assert main([str(tmp_path / "nope.txt")]) == 1
        assert "Cannot read" in capsys.readouterr().err
