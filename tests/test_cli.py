"""
Unit tests for CLI functions.
"""

import os
from datetime import datetime, timedelta
from pathlib import Path

import pytest

from file_organizer import __version__
from file_organizer.cli import EXIT_CONFIG, EXIT_FAILURE, EXIT_OK, build_parser, main, run
from file_organizer.errors import ConfigurationError, MoveError
from file_organizer.types import RunConfig

NOW = datetime(2024, 3, 15, 12, 0, 0)


@pytest.fixture
def origins(monkeypatch):
    """
    Control origin timestamps by entry name.

    Returns a dict the test fills in; unknown names default to 100 days
    before NOW.
    """
    table = {}

    def _lookup(path):
        return table.get(Path(path).name, NOW - timedelta(days=100))

    monkeypatch.setattr("file_organizer.selector.origin_timestamp", _lookup)
    return table


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        """Defaults match the documented options."""
        args = build_parser().parse_args([])

        assert args.root_folder == "~/Downloads"
        assert args.days_to_stay == 0
        assert args.debug is False
        assert args.dry_run is False
        assert args.include_hidden is False

    def test_short_options(self):
        """-r and -d are accepted."""
        args = build_parser().parse_args(["-r", "/tmp/x", "-d", "7", "--debug"])

        assert args.root_folder == "/tmp/x"
        assert args.days_to_stay == 7
        assert args.debug is True

    def test_negative_days_rejected(self, capsys):
        """Negative days is a usage error."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["-d", "-3"])

        assert exc_info.value.code == 2
        assert "must not be negative" in capsys.readouterr().err

    def test_non_integer_days_rejected(self):
        """Days must be an integer."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--days-to-stay", "soon"])

    def test_version(self, capsys):
        """--version prints the package version."""
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out


class TestRun:
    """Tests for a full organizer pass."""

    def test_moves_old_file_keeps_young_file(self, tmp_path, origins):
        """Forty-day-old file moves, one-day-old file stays."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "b.txt").write_text("b")
        origins["a.txt"] = NOW - timedelta(days=40)
        origins["b.txt"] = NOW - timedelta(days=1)

        message = run(RunConfig(root_folder=tmp_path, days_to_stay=30), now=NOW)

        assert message == "1 file(s) were moved. Bye 👋"
        assert (tmp_path / "2024-03" / "a.txt").read_text() == "a"
        assert (tmp_path / "b.txt").exists()

    def test_only_dated_folder(self, tmp_path, origins):
        """A pre-existing dated folder alone means nothing to do."""
        (tmp_path / "2024-02").mkdir()
        (tmp_path / "2024-02" / "kept.txt").write_text("kept")

        message = run(RunConfig(root_folder=tmp_path, days_to_stay=0), now=NOW)

        assert message == "Currently no files to move. Bye 👋"
        assert sorted(os.listdir(tmp_path)) == ["2024-02"]
        assert (tmp_path / "2024-02" / "kept.txt").read_text() == "kept"

    def test_second_run_is_idempotent(self, tmp_path, origins):
        """Running twice moves nothing the second time."""
        (tmp_path / "a.txt").write_text("a")
        config = RunConfig(root_folder=tmp_path, days_to_stay=0)

        assert run(config, now=NOW) == "1 file(s) were moved. Bye 👋"
        assert run(config, now=NOW) == "Currently no files to move. Bye 👋"
        assert sorted(os.listdir(tmp_path / "2024-03")) == ["a.txt"]

    def test_dry_run(self, tmp_path, origins):
        """Dry run reports and leaves files in place."""
        (tmp_path / "a.txt").write_text("a")

        message = run(
            RunConfig(root_folder=tmp_path, dry_run=True), now=NOW
        )

        assert message == "1 file(s) would be moved."
        assert sorted(os.listdir(tmp_path)) == ["a.txt"]

    def test_missing_root(self, tmp_path):
        """Missing root folder is a configuration error."""
        with pytest.raises(ConfigurationError):
            run(RunConfig(root_folder=tmp_path / "missing"), now=NOW)

    def test_negative_days(self, tmp_path):
        """Negative days in a config is a configuration error."""
        with pytest.raises(ConfigurationError):
            run(RunConfig(root_folder=tmp_path, days_to_stay=-1), now=NOW)

    def test_move_failure_propagates(self, tmp_path, origins, monkeypatch):
        """A move failure is not turned into a success message."""
        (tmp_path / "a.txt").write_text("a")

        def _fail(src, dst):
            raise OSError("disk full")

        monkeypatch.setattr("shutil.move", _fail)

        with pytest.raises(MoveError):
            run(RunConfig(root_folder=tmp_path), now=NOW)


class TestMain:
    """Tests for the main entry point and exit codes."""

    def test_success(self, tmp_path, origins, capsys):
        """Prints the moved count and exits 0."""
        (tmp_path / "a.txt").write_text("a")

        code = main(["--root-folder", str(tmp_path), "--days-to-stay", "30"])

        assert code == EXIT_OK
        assert "1 file(s) were moved." in capsys.readouterr().out
        month = datetime.now().strftime("%Y-%m")
        assert (tmp_path / month / "a.txt").exists()

    def test_nothing_to_move(self, tmp_path, origins, capsys):
        """Empty folder exits 0 with the nothing-to-do message."""
        code = main(["-r", str(tmp_path)])

        assert code == EXIT_OK
        assert "Currently no files to move." in capsys.readouterr().out

    def test_missing_root_folder(self, tmp_path, capsys):
        """Unusable root folder exits with the configuration code."""
        code = main(["-r", str(tmp_path / "missing")])

        assert code == EXIT_CONFIG
        err = capsys.readouterr().err
        assert "ERROR: Root folder" in err
        assert "does not exist" in err

    def test_destination_blocked(self, tmp_path, origins, capsys):
        """Fatal errors during the run exit with the failure code."""
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / datetime.now().strftime("%Y-%m")).write_text("blocking file")

        code = main(["-r", str(tmp_path)])

        assert code == EXIT_FAILURE
        assert "ERROR: Unable to create target folder" in capsys.readouterr().err
        assert (tmp_path / "a.txt").exists()

    def test_debug_output(self, tmp_path, origins, capsys):
        """--debug logs progress messages to stderr."""
        (tmp_path / "a.txt").write_text("a")

        main(["-r", str(tmp_path), "--debug"])

        err = capsys.readouterr().err
        assert "Collecting files in folder" in err
        assert "Possible file to move" in err
