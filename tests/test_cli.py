"""Tests for CLI commands."""

from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from cronclaw.cli.commands import app
from cronclaw.config.loader import load_config, save_config
from cronclaw.config.schema import Config, ScheduleConfig

runner = CliRunner()


def test_build_at_time_on_weekdays() -> None:
    result = runner.invoke(app, ["build", "--at", "09:00", "--weekdays", "1,2,3,4,5"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0 9 * * 1-5"


def test_build_every_x() -> None:
    result = runner.invoke(app, ["build", "--every-x", "15:minute"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "*/15 * * * *"


def test_build_every_with_hours() -> None:
    result = runner.invoke(app, ["build", "--every", "day", "--hours", "9,12,15"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "0 9,12,15 * * *"


def test_build_without_directives() -> None:
    result = runner.invoke(app, ["build"])
    assert result.exit_code == 0
    assert result.stdout.strip() == "* * * * *"


def test_build_invalid_unit() -> None:
    result = runner.invoke(app, ["build", "--every", "decade"])
    assert result.exit_code == 1
    assert "Invalid time unit for cron: decade" in result.stdout


def test_build_invalid_time() -> None:
    result = runner.invoke(app, ["build", "--at", "14:30:10"])
    assert result.exit_code == 1
    assert "Invalid time format" in result.stdout


def test_build_bad_integer_list() -> None:
    result = runner.invoke(app, ["build", "--hours", "9,noon"])
    assert result.exit_code == 1
    assert "--hours expects comma-separated integers" in result.stdout


def test_build_bad_every_x() -> None:
    result = runner.invoke(app, ["build", "--every-x", "15"])
    assert result.exit_code == 1
    assert "N:UNIT" in result.stdout


def test_build_with_preview(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    result = runner.invoke(app, ["build", "--every", "hour", "-p", "-n", "3", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "0 * * * *" in result.stdout
    assert "Next runs (UTC)" in result.stdout


def test_save_and_show(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    result = runner.invoke(
        app,
        ["save", "standup", "--at", "09:30", "--weekdays", "1,2,3,4,5", "-d", "team", "-c", str(config_path)],
    )
    assert result.exit_code == 0
    assert "Saved" in result.stdout

    cfg = load_config(config_path)
    assert cfg.schedules["standup"].description == "team"

    result = runner.invoke(app, ["show", "standup", "-c", str(config_path)])
    assert result.exit_code == 0
    assert result.stdout.strip() == "30 9 * * 1-5"


def test_save_overwrites_existing(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    runner.invoke(app, ["save", "job", "--every", "hour", "-c", str(config_path)])
    result = runner.invoke(app, ["save", "job", "--every", "day", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "Updated" in result.stdout
    assert load_config(config_path).schedules["job"].compile() == "0 0 * * *"


def test_save_invalid_does_not_write(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    result = runner.invoke(app, ["save", "bad", "--hours", "24", "-c", str(config_path)])
    assert result.exit_code == 1
    assert not config_path.exists()


def test_show_missing(tmp_path: Path) -> None:
    result = runner.invoke(app, ["show", "nope", "-c", str(tmp_path / "cfg.json")])
    assert result.exit_code == 1
    assert "No schedule named" in result.stdout


def test_list(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    cfg = Config()
    cfg.schedules["nightly"] = ScheduleConfig(every="day")
    save_config(cfg, config_path)

    result = runner.invoke(app, ["list", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "nightly" in result.stdout
    assert "0 0 * * *" in result.stdout


def test_list_empty(tmp_path: Path) -> None:
    result = runner.invoke(app, ["list", "-c", str(tmp_path / "cfg.json")])
    assert result.exit_code == 0
    assert "No schedules stored" in result.stdout


def test_onboard_creates_config(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    result = runner.invoke(app, ["onboard", "-c", str(config_path)])
    assert result.exit_code == 0
    assert config_path.exists()
    assert load_config(config_path).preview.timezone == "UTC"


def test_onboard_refreshes_existing_config(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    cfg = Config()
    cfg.schedules["keep"] = ScheduleConfig(every="week")
    save_config(cfg, config_path)

    result = runner.invoke(app, ["onboard", "-c", str(config_path)])
    assert result.exit_code == 0
    assert "keep" in load_config(config_path).schedules


def test_onboard_overwrite_resets_config(tmp_path: Path) -> None:
    config_path = tmp_path / "cfg.json"
    cfg = Config()
    cfg.schedules["gone"] = ScheduleConfig(every="week")
    save_config(cfg, config_path)

    result = runner.invoke(app, ["onboard", "-c", str(config_path), "--overwrite"])
    assert result.exit_code == 0
    assert load_config(config_path).schedules == {}


def test_version_flag() -> None:
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "cronclaw v" in result.stdout
