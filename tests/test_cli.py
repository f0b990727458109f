"""Tests for the command line interface."""

from typer.testing import CliRunner

from unoflip.cli import app

runner = CliRunner()


def test_simulate_reports_results() -> None:
    result = runner.invoke(app, ["simulate", "-n", "2", "-m", "2", "-s", "3", "-t", "40"])
    assert result.exit_code == 0, result.output
    assert "Tournament results:" in result.output


def test_simulate_rejects_player_count() -> None:
    result = runner.invoke(app, ["simulate", "-n", "7"])
    assert result.exit_code != 0


def test_play_rejects_bad_rosters() -> None:
    assert runner.invoke(app, ["play", "--players", "Ann"]).exit_code != 0
    assert runner.invoke(app, ["play", "--players", "Ann,Ann:ai"]).exit_code != 0
    assert runner.invoke(app, ["play", "--players", "Ann,Bob:robot"]).exit_code != 0


def test_play_load_missing_file(tmp_path) -> None:
    result = runner.invoke(app, ["play", "--load", str(tmp_path / "missing.sav")])
    assert result.exit_code == 1
    assert "Unable to load game" in result.output


def test_play_computer_only_match(monkeypatch) -> None:
    monkeypatch.setenv("UNOFLIP_TARGET_SCORE", "30")
    result = runner.invoke(app, ["play", "--players", "cpu_a:ai,cpu_b:ai", "--seed", "8"])
    assert result.exit_code == 0, result.output
    assert "Scores:" in result.output
    assert "Winner:" in result.output


def test_play_human_quits(tmp_path) -> None:
    result = runner.invoke(
        app,
        ["play", "--players", "Ann,cpu:ai", "--seed", "1", "--save-path", str(tmp_path / "g.sav")],
        input="s\nq\n",
    )
    assert result.exit_code == 0, result.output
    assert "Game saved to" in result.output
    assert "Ann quit the game." in result.output
    assert (tmp_path / "g.sav").exists()
