"""Tests for console and file logging setup."""

import io
import logging
from pathlib import Path

import pytest

from deptree_rdf.utils.logging import (
    DEFAULT_THEME,
    ComponentFormatter,
    add_file_handler,
    remove_file_handler,
    setup_colored_logging,
    theme_for,
    wants_color,
)


def record(name: str, level: int, message: str) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, message, None, None)


@pytest.fixture(autouse=True)
def restore_logging():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    remove_file_handler()
    root.handlers = handlers
    root.setLevel(level)


class TestThemes:
    def test_most_specific_prefix_wins(self) -> None:
        assert theme_for("deptree_rdf.triples.serializer")[0] == "📝"
        assert theme_for("deptree_rdf.loaders.maven_loader")[0] == "📂"
        assert theme_for("deptree_rdf.errors")[0] == "📦"

    def test_prefix_must_end_at_a_dot(self) -> None:
        assert theme_for("deptree_rdf_extra") == DEFAULT_THEME
        assert theme_for("rdflib.term") == DEFAULT_THEME


class TestComponentFormatter:
    def test_plain_line(self) -> None:
        formatter = ComponentFormatter(color=False, datefmt="%H:%M:%S")

        line = formatter.format(record("deptree_rdf.pipeline", logging.INFO, "STAGE 1"))

        _, level, component, message = line.split(" | ")
        assert level.strip() == "INFO"
        assert component.strip() == "pipeline"
        assert message == "STAGE 1"
        assert "\033[" not in line

    def test_colored_warning(self) -> None:
        formatter = ComponentFormatter(color=True)

        line = formatter.format(record("deptree_rdf.main", logging.WARNING, "careful"))

        assert "🚀" in line
        assert "\033[33mcareful\033[0m" in line


class TestWantsColor:
    def test_not_a_terminal(self) -> None:
        assert not wants_color(io.StringIO())

    def test_no_color_env(self, monkeypatch) -> None:
        class Terminal(io.StringIO):
            def isatty(self) -> bool:
                return True

        assert wants_color(Terminal())
        monkeypatch.setenv("NO_COLOR", "1")
        assert not wants_color(Terminal())


class TestHandlers:
    def test_setup_replaces_root_handlers(self) -> None:
        setup_colored_logging(level=logging.DEBUG)

        root = logging.getLogger()
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, ComponentFormatter)
        assert root.level == logging.DEBUG
        assert logging.getLogger("rdflib").level == logging.WARNING

    def test_file_handler(self, tmp_path: Path) -> None:
        setup_colored_logging(level=logging.INFO)
        path = tmp_path / "logs" / "run.log"

        add_file_handler(path, logging.INFO)
        logging.getLogger("deptree_rdf.pipeline").info("Writing %d triples", 3)
        remove_file_handler()

        content = path.read_text(encoding="utf-8")
        assert "Logging to file:" in content
        assert "| pipeline     | Writing 3 triples" in content
        assert "\033[" not in content

    def test_second_file_handler_replaces_first(self, tmp_path: Path) -> None:
        first = add_file_handler(tmp_path / "first.log")
        second = add_file_handler(tmp_path / "second.log")

        handlers = logging.getLogger().handlers
        assert second in handlers
        assert first not in handlers
