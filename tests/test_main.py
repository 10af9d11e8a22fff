"""Tests for the command line entry point."""

from typer.testing import CliRunner

from dirmanager.main import app

runner = CliRunner()


def invoke(args, tmp_path, user_input=""):
    config = tmp_path / "settings.json"
    return runner.invoke(
        app,
        args + ["--config", str(config), "--log-dir", str(tmp_path / "logs")],
        input=user_input,
    )


class TestCli:
    """Startup validation and exit codes."""

    def test_exit_selection_returns_zero(self, working_dir, tmp_path):
        """Choosing Exit ends the process normally."""
        result = invoke([str(working_dir)], tmp_path, "8\n")

        assert result.exit_code == 0
        assert "Choose an option:" in result.output

    def test_missing_directory_is_fatal(self, tmp_path):
        """A directory that does not exist terminates with code 1."""
        result = invoke([str(tmp_path / "missing")], tmp_path)

        assert result.exit_code == 1
        assert "Directory does not exist or is not accessible." in result.output

    def test_prompts_for_directory(self, working_dir, tmp_path):
        """Without an argument the directory is read from input."""
        result = invoke([], tmp_path, f"{working_dir}\n1\n8\n")

        assert result.exit_code == 0
        assert "Enter the directory path:" in result.output
        assert "a.txt" in result.output

    def test_startup_failure_is_logged(self, working_dir, tmp_path):
        """The invalid directory is recorded in the diagnostic log."""
        invoke([str(working_dir / "a.txt")], tmp_path)

        log_text = (tmp_path / "logs" / "filemanager.log").read_text(encoding="utf-8")
        assert "Invalid working directory" in log_text
