"""Shared fixtures for LineLint tests."""

import os
import tempfile

# 日志写入临时目录，避免污染 ~/.linelint
os.environ.setdefault("LINELINT_LOG_DIR", tempfile.mkdtemp(prefix="linelint-logs-"))

import pytest

from linelint.logger import reset_session
from linelint.source_file import SourceFile
from linelint.syntax_kinds import DeclarationKind


@pytest.fixture(autouse=True)
def fresh_loggers():
    yield
    reset_session()


@pytest.fixture
def make_file(tmp_path):
    """Write contents to disk and wrap them in a SourceFile with optional kinds."""

    def _make(contents, syntax=None, declarations=None, name="Sample.swift"):
        path = tmp_path / name
        path.write_text(contents, encoding="utf-8")
        return SourceFile.from_path(
            str(path),
            syntax_kinds=(lambda: syntax) if syntax is not None else None,
            declaration_kinds=(lambda: declarations) if declarations is not None else None,
        )

    return _make


@pytest.fixture
def function_line():
    """Declaration kinds marking the given 1-based lines as functions."""

    def _kinds(*indices):
        return {index: {DeclarationKind.FUNCTION_METHOD_INSTANCE} for index in indices}

    return _kinds
