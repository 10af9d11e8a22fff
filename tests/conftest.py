"""Shared fixtures for the dirmanager test suite.

Every test works inside pytest's ``tmp_path``. The ``working_dir`` fixture
builds the small directory used throughout: ``a.txt``, ``b.log`` and an
empty ``sub/``.
"""

import io

import pytest
from rich.console import Console

from dirmanager.core.directory_lister import DirectoryLister
from dirmanager.core.file_operations import FileOperations
from dirmanager.core.path_resolver import PathResolver
from dirmanager.utils.operation_log import OperationLog


@pytest.fixture
def working_dir(tmp_path):
    root = tmp_path / "work"
    root.mkdir()
    (root / "a.txt").write_text("alpha content")
    (root / "b.log").write_text("log line\n")
    (root / "sub").mkdir()
    return root


@pytest.fixture
def resolver(working_dir):
    return PathResolver(working_dir)


@pytest.fixture
def file_ops():
    return FileOperations(check_free_space=False)


@pytest.fixture
def lister():
    return DirectoryLister()


@pytest.fixture
def operation_log(tmp_path):
    log = OperationLog(tmp_path / "logs")
    log.open()
    yield log
    log.close()


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=200, color_system=None)
