#!/usr/bin/env python3
"""
DirManager Application
Main entry point for the interactive directory manager
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from dirmanager.config import APP_NAME, APP_VERSION
from dirmanager.config.settings import SettingsManager
from dirmanager.core.file_operations import FileOperations
from dirmanager.core.path_resolver import PathResolver, WorkingDirectoryError, validate_working_directory
from dirmanager.ui.command_dispatcher import CommandDispatcher
from dirmanager.utils.operation_log import OperationLog

app = typer.Typer(add_completion=False)


class DirManagerApp:
    """Main DirManager Application Class"""

    def __init__(self, config_file: Optional[Path] = None,
                 log_dir: Optional[Path] = None,
                 console: Optional[Console] = None):
        """Initialize the application"""
        self.config_file = config_file
        self.log_dir = log_dir
        self.console = console or Console()
        self.settings_manager = None
        self.operation_log = None
        self.logger = logging.getLogger(__name__)

    def load_settings(self):
        """Load application settings"""
        self.settings_manager = SettingsManager(self.config_file)
        return self.settings_manager.settings

    def open_log(self, settings) -> OperationLog:
        """Setup the operation log"""
        log_settings = settings.logging
        log_dir = self.log_dir if self.log_dir is not None else Path(log_settings.log_dir)
        self.operation_log = OperationLog(log_dir, log_settings.log_file, log_settings.level)
        self.operation_log.open()
        self.logger.info(f"{APP_NAME} {APP_VERSION} starting...")
        return self.operation_log

    def ask_directory(self) -> str:
        """Prompt for the working directory"""
        self.console.print("Enter the directory path:")
        return self.console.input()

    def run(self, directory: Optional[str] = None) -> int:
        """Run the application, returning the process exit code"""
        settings = self.load_settings()
        operation_log = self.open_log(settings)

        try:
            if directory is None:
                try:
                    directory = self.ask_directory()
                except (EOFError, KeyboardInterrupt):
                    directory = ""

            try:
                working_directory = validate_working_directory(directory)
            except WorkingDirectoryError as e:
                operation_log.record_failure(f"Invalid working directory {directory!r}", e)
                self.console.print(str(e), style="red", markup=False)
                return 1

            resolver = PathResolver(working_directory, settings.paths.containment)
            dispatcher = CommandDispatcher(
                resolver,
                operation_log,
                settings=settings,
                file_ops=FileOperations(check_free_space=settings.operations.check_free_space),
                console=self.console,
            )
            dispatcher.run()

            self.logger.info("Application closed normally")
            return 0

        finally:
            operation_log.close()


@app.command()
def main(
    directory: Optional[str] = typer.Argument(
        None, help="Directory to manage. Prompted for when omitted."),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings JSON file."),
    log_dir: Optional[Path] = typer.Option(
        None, "--log-dir", help="Directory for the diagnostic log."),
):
    """Interactive manager for a single directory."""
    exit_code = DirManagerApp(config_file=config, log_dir=log_dir).run(directory)
    raise typer.Exit(code=exit_code)


if __name__ == "__main__":
    app()
