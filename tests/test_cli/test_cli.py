"""Tests for the CLI commands."""

from __future__ import annotations

import pytest
from typer.testing import CliRunner

from cellfmt.cli.app import app
from cellfmt.cli.conditional_cmd import parse_rule
from cellfmt.exceptions import RuleParseError
from cellfmt.formats.serializer import FormatSerializer
from cellfmt.formats.settings import Color, ConditionOperator, DateTimeSettings

runner = CliRunner()


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert "cellfmt 0.1.0" in result.output


def test_no_args_shows_help():
    result = runner.invoke(app, [])
    # Typer returns exit code 0 or 2 for help display
    assert result.exit_code in (0, 2)
    assert "Usage" in result.output


# ── number ──


def test_number_defaults():
    result = runner.invoke(app, ["number"])
    assert result.exit_code == 0
    assert '"$" #,##0.00_);[Red]("$" #,##0.00);"-";@' in result.output
    assert "($ 1,234.56)" in result.output
    assert "Live Preview" in result.output


def test_number_extra_sample():
    result = runner.invoke(app, ["number", "--currency", "", "--scale", "thousands", "--value", "1234567"])
    assert result.exit_code == 0
    assert '#,##0.00, "K"' in result.output
    assert "1,234.57 K" in result.output


def test_number_json():
    result = runner.invoke(app, ["number", "--format", "json"])
    assert result.exit_code == 0
    assert '"code"' in result.output
    assert '"preview"' in result.output


def test_number_invalid_output_format():
    result = runner.invoke(app, ["number", "--format", "xml"])
    assert result.exit_code == 1
    assert "Invalid format" in result.output


def test_number_from_file(tmp_path, accounting_format):
    path = tmp_path / "fmt.yml"
    path.write_text(FormatSerializer.to_yaml(accounting_format))
    result = runner.invoke(app, ["number", "--from-file", str(path)])
    assert result.exit_code == 0
    assert '[Red]("$" #,##0.00)' in result.output


def test_number_from_file_wrong_kind(tmp_path):
    path = tmp_path / "fmt.yml"
    path.write_text(FormatSerializer.to_yaml(DateTimeSettings()))
    result = runner.invoke(app, ["number", "--from-file", str(path)])
    assert result.exit_code == 1
    assert "Expected" in result.output


def test_number_from_missing_file(tmp_path):
    result = runner.invoke(app, ["number", "--from-file", str(tmp_path / "nope.yml")])
    assert result.exit_code == 1
    assert "File not found" in result.output


# ── datetime ──


def test_datetime_elapsed_hours():
    result = runner.invoke(app, ["datetime", "--mode", "duration", "--no-date", "--seconds", "100000"])
    assert result.exit_code == 0
    assert "[h]:mm" in result.output
    assert "27:46" in result.output


def test_datetime_timer_preset():
    result = runner.invoke(app, ["datetime", "--mode", "duration", "--smart", "timer", "--seconds", "100000"])
    assert result.exit_code == 0
    assert "[<0.0416667][Blue]mm:ss;[h]:mm:ss" in result.output
    assert "27:46:40" in result.output


def test_datetime_clock_sample():
    result = runner.invoke(app, ["datetime", "--no-date", "--sample-date", "2025-10-25T09:05:00"])
    assert result.exit_code == 0
    assert "hh:mm" in result.output
    assert "09:05" in result.output


def test_datetime_date_disabled_note():
    result = runner.invoke(app, ["datetime", "--mode", "duration", "--leading", "minutes"])
    assert result.exit_code == 0
    assert "[m]" in result.output
    assert "Calendar dates are disabled" in result.output


def test_datetime_json():
    result = runner.invoke(app, ["datetime", "--format", "json"])
    assert result.exit_code == 0
    assert "dd/mm/yyyy hh:mm" in result.output


# ── conditional ──


def test_conditional_three_rules():
    result = runner.invoke(app, [
        "conditional",
        "--rule", '>=100|Green|"High" 0.0',
        "--rule", '<50|Red|"Low" 0.0',
        "--rule", "|Blue|0.0",
    ])
    assert result.exit_code == 0
    assert '[>=100][Green]"High" 0.0;[<50][Red]"Low" 0.0;[Blue]0.0' in result.output


def test_conditional_too_many_rules_warns():
    args = ["conditional"]
    for i in range(4):
        args += ["--rule", f">{i}||0"]
    result = runner.invoke(app, args)
    assert result.exit_code == 0
    assert "[>0]0;[>1]0;[>2]0" in result.output
    assert "Potential Errors Detected" in result.output


def test_conditional_bad_rule():
    result = runner.invoke(app, ["conditional", "--rule", "oops"])
    assert result.exit_code == 1
    assert "Cannot parse rule" in result.output


def test_conditional_requires_rules():
    result = runner.invoke(app, ["conditional"])
    assert result.exit_code == 1
    assert "--rule" in result.output


# ── validate ──


def test_validate_reports_bad_tag():
    result = runner.invoke(app, ["validate", "[Purple]0.00"])
    assert result.exit_code == 0
    assert "[Purple]" in result.output


def test_validate_strict_fails():
    result = runner.invoke(app, ["validate", "--strict", "[Purple]0.00"])
    assert result.exit_code == 1


def test_validate_clean():
    result = runner.invoke(app, ["validate", "--strict", "[h]:mm:ss"])
    assert result.exit_code == 0
    assert "No issues found" in result.output


# ── rule parsing ──


class TestParseRule:
    def test_full_rule(self):
        rule = parse_rule('>=100|Green|"High" 0.0')
        assert rule.condition.operator == ConditionOperator.GE
        assert rule.condition.value == 100
        assert rule.color == Color.GREEN
        assert rule.format == '"High" 0.0'

    def test_else_rule(self):
        rule = parse_rule("||0.0")
        assert rule.is_else
        assert rule.color is None
        assert rule.format == "0.0"

    def test_color_case_insensitive(self):
        assert parse_rule("<>0|red|0").color == Color.RED

    def test_negative_threshold(self):
        rule = parse_rule("< -5.5||0")
        assert rule.condition.operator == ConditionOperator.LT
        assert rule.condition.value == -5.5

    def test_format_may_contain_pipes(self):
        assert parse_rule('=1||"a|b"').format == '"a|b"'

    @pytest.mark.parametrize("text", ["oops", "=>5||0", ">5|Purple|0", "1|2"])
    def test_invalid(self, text):
        with pytest.raises(RuleParseError):
            parse_rule(text)
