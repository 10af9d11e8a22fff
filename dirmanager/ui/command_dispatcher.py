import logging
from enum import IntEnum
from typing import Callable, Dict, Optional, TextIO

from rich.console import Console
from rich.markup import escape

from ..config.settings import AppSettings, OverwritePolicy
from ..core.directory_lister import DirectoryLister, DirectoryListingError
from ..core.file_operations import FileOperations
from ..core.models import OperationResult, OperationStatus
from ..core.path_resolver import PathResolver, PathOutsideWorkingDirectoryError
from ..utils.file_utils import FileUtils
from ..utils.operation_log import OperationLog
from ..utils.search_engine import SearchEngine

logger = logging.getLogger(__name__)


class Command(IntEnum):
    """Menu selectors"""
    LIST = 1
    COPY = 2
    MOVE = 3
    DELETE_FILE = 4
    CREATE_DIRECTORY = 5
    DELETE_DIRECTORY = 6
    SEARCH = 7
    EXIT = 8


MENU_LABELS = {
    Command.LIST: "Display Directory Contents",
    Command.COPY: "Copy File",
    Command.MOVE: "Move File",
    Command.DELETE_FILE: "Delete File",
    Command.CREATE_DIRECTORY: "Create Directory",
    Command.DELETE_DIRECTORY: "Delete Directory",
    Command.SEARCH: "Search Files",
    Command.EXIT: "Exit",
}

STATUS_STYLES = {
    OperationStatus.SUCCESS: "green",
    OperationStatus.IO_FAILURE: "red",
}


class CommandDispatcher:
    """Read-eval loop mapping menu selectors to directory operations"""

    def __init__(self, resolver: PathResolver,
                 operation_log: OperationLog,
                 settings: Optional[AppSettings] = None,
                 file_ops: Optional[FileOperations] = None,
                 lister: Optional[DirectoryLister] = None,
                 search_engine: Optional[SearchEngine] = None,
                 console: Optional[Console] = None,
                 stream: Optional[TextIO] = None):
        self.settings = settings or AppSettings()
        self.resolver = resolver
        self.operation_log = operation_log
        self.file_ops = file_ops or FileOperations(
            check_free_space=self.settings.operations.check_free_space)
        self.lister = lister or DirectoryLister()
        self.search_engine = search_engine or SearchEngine(
            self.lister, self.settings.search.case_sensitivity)
        self.console = console or Console()
        self.stream = stream

        self._handlers: Dict[Command, Callable[[], None]] = {
            Command.LIST: self.display_directory_contents,
            Command.COPY: self.copy_file,
            Command.MOVE: self.move_file,
            Command.DELETE_FILE: self.delete_file,
            Command.CREATE_DIRECTORY: self.create_directory,
            Command.DELETE_DIRECTORY: self.delete_directory,
            Command.SEARCH: self.search_files,
        }

    def run(self):
        """Loop until Exit is chosen or input ends"""
        logger.info(f"Command loop started in {self.resolver.working_directory}")
        try:
            while True:
                self.display_menu()
                if not self.dispatch(self.read_line("Enter your choice: ")):
                    break
        except (EOFError, KeyboardInterrupt):
            self.console.print()
            logger.info("Input closed, leaving command loop")
        logger.info("Command loop finished")

    def dispatch(self, choice: str) -> bool:
        """Process one selector. Returns False when the loop should stop."""
        try:
            command = Command(int(choice.strip()))
        except ValueError:
            self.console.print("Invalid choice. Please try again.", style="yellow")
            return True

        if command is Command.EXIT:
            return False

        self._handlers[command]()
        return True

    def display_menu(self):
        self.console.print("\n[bold]Choose an option:[/bold]")
        for command in Command:
            self.console.print(f"{command.value}. {MENU_LABELS[command]}")

    def read_line(self, prompt: str) -> str:
        line = self.console.input(escape(prompt), stream=self.stream)
        if self.stream is not None and not line:
            raise EOFError
        return line.rstrip("\r\n")

    # Commands

    def display_directory_contents(self):
        directory = self.resolver.working_directory
        try:
            entries = self.lister.list_directory(directory)
        except DirectoryListingError as e:
            self.operation_log.record_failure("Error displaying directory contents", e.error)
            self.console.print("Could not read directory.", style="red")
            return

        if not entries:
            self.console.print("Directory is empty.")
            return

        display = self.settings.display
        for entry in entries:
            row = FileUtils.format_entry_row(entry, display.name_width, display.size_width,
                                             display.timestamp_format)
            self.console.print(row, markup=False, highlight=False)

    def copy_file(self):
        self._transfer("Copy", "Enter the file name to copy:", self.file_ops.copy_file)

    def move_file(self):
        self._transfer("Move", "Enter the file name to move:", self.file_ops.move_file)

    def _transfer(self, context: str, question: str,
                  operation: Callable[..., OperationResult]):
        source = self._ask_path(context, question)
        if source is None:
            return

        failure = self.file_ops.check_source(source)
        if failure:
            self._report(context, failure)
            return

        destination = self._ask_path(context, "Enter the destination path:")
        if destination is None:
            return

        if self.settings.operations.overwrite is OverwritePolicy.CONFIRM:
            target = self.file_ops.destination_for(source, destination)
            if self._is_existing_file(target) and \
                    not self._confirm(f"{target.name} exists. Overwrite? (y/N) "):
                self.console.print("Cancelled.")
                return

        self._report(context, operation(source, destination))

    def delete_file(self):
        target = self._ask_path("Delete file", "Enter the file name to delete:")
        if target is not None:
            self._report("Delete file", self.file_ops.delete_file(target))

    def create_directory(self):
        target = self._ask_path("Create directory", "Enter the name of the new directory:")
        if target is not None:
            self._report("Create directory", self.file_ops.create_directory(target))

    def delete_directory(self):
        target = self._ask_path("Delete directory", "Enter the name of the directory to delete:")
        if target is None:
            return

        if self.resolver.is_working_directory(target):
            self._report("Delete directory", OperationResult.failure(
                OperationStatus.REJECTED, "Cannot delete the working directory", target))
            return

        self._report("Delete directory", self.file_ops.delete_directory(target))

    def search_files(self):
        term = self.read_line("Enter the search term (file name or extension): ")
        try:
            matches = self.search_engine.search(self.resolver.working_directory, term)
        except DirectoryListingError as e:
            self.operation_log.record_failure("Error searching files", e.error)
            self.console.print("Could not read directory.", style="red")
            return

        if not matches:
            self.console.print("No matching files found.")
            return

        for entry in matches:
            self.console.print(f"Found: {escape(entry.name)}", highlight=False)

    # Helpers

    def _ask_path(self, context: str, question: str):
        """Ask for a name and resolve it, or report and return None"""
        name = self.read_line(question + " ")
        if not name.strip():
            self.console.print("No name given.", style="yellow")
            return None

        try:
            return self.resolver.resolve(name)
        except PathOutsideWorkingDirectoryError as e:
            self._report(context, OperationResult.failure(
                OperationStatus.REJECTED, "Path is outside the working directory", e.path, e))
            return None

    @staticmethod
    def _is_existing_file(path) -> bool:
        try:
            return path.is_file()
        except (OSError, ValueError):
            # Tên không hợp lệ, để thao tác copy/move báo lỗi
            return False

    def _confirm(self, question: str) -> bool:
        return self.read_line(question).strip().lower() in ("y", "yes")

    def _report(self, context: str, result: OperationResult):
        self.operation_log.record_result(context, result)
        style = STATUS_STYLES.get(result.status, "yellow")
        self.console.print(escape(self._status_line(result)), style=style, highlight=False)

    @staticmethod
    def _status_line(result: OperationResult) -> str:
        if result.status is OperationStatus.IO_FAILURE:
            return f"{result.message}. See log for details."
        return f"{result.message}."
