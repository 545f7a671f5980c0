"""Tests for the timeq command line."""

import pytest
from typer.testing import CliRunner

import timeq.main
from timeq import __version__
from timeq.config.settings import Settings
from timeq.core.errors import ConfigurationError
from timeq.main import app

from conftest import NOW_EPOCH, NOW_MILLIS

runner = CliRunner()


@pytest.fixture(autouse=True)
def fixed_environment(monkeypatch, ny_clock):
    """Pin the clock to NOW in New York and use default settings."""
    monkeypatch.setattr(timeq.main, "get_clock", lambda: ny_clock)
    monkeypatch.setattr(timeq.main, "get_settings", lambda: Settings())


class TestCLI:
    """Test CLI basic functionality."""

    def test_version(self):
        """Test --version flag."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert f"timeq v{__version__}" in result.stdout

    def test_help(self):
        """Test help output."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "--epoch" in result.stdout
        assert "--readable" in result.stdout


class TestOutputFormats:
    """Test each output mode end to end."""

    def test_epoch_now(self):
        """Test epoch seconds of now."""
        result = runner.invoke(app, ["-e"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(NOW_EPOCH)

    def test_millis_now(self):
        """Test epoch milliseconds of now."""
        result = runner.invoke(app, ["--millis"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(NOW_MILLIS)

    def test_epoch_rfc3339(self):
        """Test epoch seconds of an RFC3339 input."""
        result = runner.invoke(app, ["--epoch", "2022-02-02T01:00:00Z"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "1643763600"

    def test_millis_relative(self):
        """Test epoch milliseconds of a relative input."""
        result = runner.invoke(app, ["-m", "2 hours ago"])
        assert result.exit_code == 0
        assert result.stdout.strip() == str(NOW_MILLIS - 2 * 3600 * 1000)

    def test_readable_utc(self):
        """Test readable UTC output applies the current local offset."""
        result = runner.invoke(app, ["-r", "-o", "UTC", "2022-02-02T01:00:00Z"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2022-02-01T21:00:00-04:00"

    def test_readable_output_case_insensitive(self):
        """Test --output values ignore case."""
        result = runner.invoke(app, ["-r", "-o", "local", "2022-02-02T01:00:00Z"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2022-02-01T21:00:00-04:00"

    def test_readable_local_datetime(self):
        """Test the local datetime pattern."""
        result = runner.invoke(app, ["--readable", "--output", "Local", "2022-02-02 01:00:00"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2022-02-02T02:00:00-04:00"

    def test_readable_later(self):
        """Test a 'later' phrase is truncated to 100ms."""
        result = runner.invoke(app, ["-r", "-o", "Local", "1 hour later"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2024-06-15T09:00:00.100-04:00"

    def test_readable_utc_zero_offset_setting(self, monkeypatch):
        """Test the setting that renders UTC with a zero offset."""
        monkeypatch.setattr(
            timeq.main, "get_settings", lambda: Settings(utc_uses_local_offset=False)
        )
        result = runner.invoke(app, ["-r", "-o", "UTC", "2022-02-02T01:00:00Z"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "2022-02-02T01:00:00+00:00"

    def test_verbose(self):
        """Test --verbose explains which parser matched."""
        result = runner.invoke(app, ["-e", "-v", "2 hours ago"])
        assert result.exit_code == 0
        assert "relative" in result.output


class TestFlagValidation:
    """Test output flags are validated before resolution."""

    @pytest.fixture
    def resolve_calls(self, monkeypatch):
        calls = []

        def fake_resolve(*args, **kwargs):
            calls.append(args)
            raise AssertionError("resolve should not run")

        monkeypatch.setattr(timeq.main, "resolve", fake_resolve)
        return calls

    @pytest.mark.parametrize(
        "args",
        [
            [],
            ["-e", "-m"],
            ["-e", "-r", "-o", "UTC"],
            ["-r"],
            ["-r", "2022-02-02T01:00:00Z"],
            ["-e", "-o", "UTC"],
            ["-m", "--output", "Local"],
        ],
    )
    def test_invalid_flag_combinations(self, args, resolve_calls):
        """Test invalid combinations are usage errors and skip resolution."""
        result = runner.invoke(app, args)
        assert result.exit_code == 2
        assert resolve_calls == []

    def test_unknown_output_zone(self):
        """Test --output only accepts UTC or Local."""
        result = runner.invoke(app, ["-r", "-o", "Mars"])
        assert result.exit_code == 2


class TestErrors:
    """Test fatal errors."""

    def test_unparseable_input(self):
        """Test input matching no grammar fails."""
        result = runner.invoke(app, ["-e", "not a date"])
        assert result.exit_code == 1
        # The error panel may wrap lines and draw borders
        message = " ".join(result.output.replace("│", " ").split())
        assert "RFC3339" in message
        assert "YYYY-MM-DD HH:MM:SS" in message
        assert "ago|later" in message

    def test_ambiguous_local_time(self):
        """Test a DST-ambiguous local time fails."""
        result = runner.invoke(app, ["-r", "-o", "Local", "2022-11-06 01:30:00"])
        assert result.exit_code == 1

    def test_bad_configuration(self, monkeypatch):
        """Test configuration errors fail before resolution."""

        def broken_settings():
            raise ConfigurationError("readable.utc_uses_local_offset must be a boolean")

        monkeypatch.setattr(timeq.main, "get_settings", broken_settings)
        result = runner.invoke(app, ["-e"])
        assert result.exit_code == 1
