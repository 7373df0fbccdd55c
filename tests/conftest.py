"""Shared test fixtures."""

from __future__ import annotations

import sqlite3
import types
from collections.abc import Iterator
from pathlib import Path

import pytest
import structlog

from row_gen.core.config import GeneratorConfig
from row_gen.core.engine import MapperGenerator


@pytest.fixture(autouse=True)
def _reset_structlog() -> Iterator[None]:
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def config() -> GeneratorConfig:
    """Default generator configuration."""
    return GeneratorConfig()


@pytest.fixture
def generator(config: GeneratorConfig) -> MapperGenerator:
    return MapperGenerator(config)


@pytest.fixture
def load_generated():
    """Helper to execute generated source as a fresh module.

    Usage:
        module = load_generated(unit.source)
        track = module.create_from_cursor(cursor)
    """

    def _load(source: str, name: str = "generated_mapping") -> types.ModuleType:
        module = types.ModuleType(name)
        exec(compile(source, f"<{name}>", "exec"), module.__dict__)
        return module

    return _load


@pytest.fixture
def sqlite_connection() -> Iterator[sqlite3.Connection]:
    """In-memory SQLite connection."""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def write_toml(tmp_path: Path):
    """Helper to write TOML files into a temp directory.

    Usage:
        write_toml("row-gen.toml", 'read_function = "from_row"')
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = tmp_path / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write
