"""Integration tests for CLI commands."""

import pytest
from typer.testing import CliRunner

from ramanmix.cli.app import app

pytestmark = pytest.mark.integration


@pytest.fixture
def runner():
    """Create a CLI runner."""
    return CliRunner()


class TestCLICommands:
    """Test CLI command invocation."""

    def test_version_flag(self, runner):
        """--version shows the program name and version."""
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "ramanmix v" in result.output

    def test_help_flag(self, runner):
        """--help lists the commands."""
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "fit" in result.output
        assert "init" in result.output

    def test_init_command_creates_file(self, runner, tmp_path):
        """init writes a configuration template."""
        config_path = tmp_path / "ramanmix.toml"
        result = runner.invoke(app, ["init", str(config_path)])
        assert result.exit_code == 0
        content = config_path.read_text()
        assert "[fitting]" in content
        assert "[background]" in content
        assert "[output]" in content

    def test_init_command_no_overwrite(self, runner, tmp_path):
        """init does not overwrite without --force."""
        config_path = tmp_path / "ramanmix.toml"
        config_path.write_text("# existing config")
        result = runner.invoke(app, ["init", str(config_path)])
        assert result.exit_code == 1
        assert config_path.read_text() == "# existing config"

    def test_init_command_force(self, runner, tmp_path):
        """init --force replaces an existing file."""
        config_path = tmp_path / "ramanmix.toml"
        config_path.write_text("# existing config")
        result = runner.invoke(app, ["init", str(config_path), "--force"])
        assert result.exit_code == 0
        assert "[fitting]" in config_path.read_text()


class TestFitCommand:
    """Test the fit command."""

    def test_fit_records_sample(self, runner, mixture_file, config_file, tmp_path):
        """Fitting a file appends one ledger row."""
        result = runner.invoke(app, ["fit", str(mixture_file), "--config", str(config_file)])
        assert result.exit_code == 0, result.output
        lines = (tmp_path / "acombinedresults.txt").read_text().splitlines()
        assert lines[0] == "name m1_height m2_height"
        assert lines[1].startswith("sample_a ")

    def test_fit_twice_skips(self, runner, mixture_file, config_file, tmp_path):
        """The second invocation leaves the ledger unchanged."""
        args = ["fit", str(mixture_file), "--config", str(config_file)]
        runner.invoke(app, args)
        result = runner.invoke(app, args)
        assert result.exit_code == 0
        assert len((tmp_path / "acombinedresults.txt").read_text().splitlines()) == 2

    def test_delete_confirmed(self, runner, mixture_file, config_file, tmp_path):
        """Confirming --delete clears previous records before fitting."""
        ledger = tmp_path / "acombinedresults.txt"
        ledger.write_text("name m1_height m2_height\nold_sample 1 2\n")
        result = runner.invoke(
            app, ["fit", str(mixture_file), "-c", str(config_file), "-d"], input="y\n"
        )
        assert result.exit_code == 0, result.output
        assert "Records deleted!" in result.output
        names = [line.split()[0] for line in ledger.read_text().splitlines()[1:]]
        assert names == ["sample_a"]

    def test_delete_declined(self, runner, mixture_file, config_file, tmp_path):
        """Declining --delete keeps previous records."""
        ledger = tmp_path / "acombinedresults.txt"
        ledger.write_text("name m1_height m2_height\nold_sample 1 2\n")
        result = runner.invoke(
            app, ["fit", str(mixture_file), "-c", str(config_file), "-d"], input="n\n"
        )
        assert result.exit_code == 0, result.output
        assert "Records saved!" in result.output
        names = [line.split()[0] for line in ledger.read_text().splitlines()[1:]]
        assert names == ["old_sample", "sample_a"]

    def test_ledger_override(self, runner, mixture_file, config_file, tmp_path):
        """--ledger replaces the configured ledger location."""
        other = tmp_path / "other" / "ledger.txt"
        result = runner.invoke(
            app, ["fit", str(mixture_file), "-c", str(config_file), "-l", str(other)]
        )
        assert result.exit_code == 0, result.output
        assert other.read_text().splitlines()[1].startswith("sample_a ")
        assert not (tmp_path / "acombinedresults.txt").exists()

    def test_quiet_still_reports_errors(self, runner, config_file, tmp_path):
        """Per-sample errors are printed in quiet mode; the batch succeeds."""
        missing = tmp_path / "absent.txt"
        result = runner.invoke(app, ["fit", str(missing), "-c", str(config_file), "-q"])
        assert result.exit_code == 0
        assert "absent:" in result.output
        assert "Summary" not in result.output

    def test_invalid_config(self, runner, mixture_file, tmp_path):
        """An invalid configuration exits with status 1."""
        bad = tmp_path / "bad.toml"
        bad.write_text('[fitting]\nmethod = "simplex"\n')
        result = runner.invoke(app, ["fit", str(mixture_file), "-c", str(bad)])
        assert result.exit_code == 1

    def test_ledger_mismatch_aborts(self, runner, mixture_file, config_file, tmp_path):
        """A ledger for other materials aborts with status 1."""
        (tmp_path / "acombinedresults.txt").write_text("name pvc_height\n")
        result = runner.invoke(app, ["fit", str(mixture_file), "-c", str(config_file)])
        assert result.exit_code == 1
