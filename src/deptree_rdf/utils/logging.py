import logging
import os
import sys
from pathlib import Path

RESET = "\033[0m"

LEVEL_COLORS = {
    "DEBUG": "\033[37m",
    "INFO": "\033[32m",
    "WARNING": "\033[33m",
    "ERROR": "\033[31m",
    "CRITICAL": "\033[1;31m",
}

# Longest matching logger prefix wins
COMPONENT_THEMES = {
    "deptree_rdf.loaders": ("📂", "\033[1;36m"),
    "deptree_rdf.triples.generator": ("🔗", "\033[1;32m"),
    "deptree_rdf.triples.serializer": ("📝", "\033[1;35m"),
    "deptree_rdf.triples.validator": ("🔍", "\033[1;33m"),
    "deptree_rdf.pipeline": ("⚙️ ", "\033[1;34m"),
    "deptree_rdf.main": ("🚀", "\033[1;32m"),
    "deptree_rdf": ("📦", "\033[1m"),
}
DEFAULT_THEME = ("•", "\033[1;90m")


def theme_for(logger_name: str) -> tuple[str, str]:
    """Icon and colour for a logger, by the most specific component prefix."""
    matches = [
        prefix
        for prefix in COMPONENT_THEMES
        if logger_name == prefix or logger_name.startswith(prefix + ".")
    ]
    return COMPONENT_THEMES[max(matches, key=len)] if matches else DEFAULT_THEME


def wants_color(stream) -> bool:
    """Colour only interactive terminals, and never when NO_COLOR is set."""
    if os.environ.get("NO_COLOR"):
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


class ComponentFormatter(logging.Formatter):
    """One line per record: time | level | component | message.

    With colour on, the level and component are tinted and the component gets
    its icon; warnings and worse colour the message too.
    """

    def __init__(self, color: bool = True, datefmt: str | None = None):
        super().__init__(datefmt=datefmt)
        self.color = color

    def format(self, record):
        component = record.name.rsplit(".", 1)[-1]
        message = record.getMessage()
        level = f"{record.levelname:8}"

        if self.color:
            icon, tint = theme_for(record.name)
            level_color = LEVEL_COLORS.get(record.levelname, RESET)
            level = f"{level_color}{level}{RESET}"
            component = f"{tint}{icon} {component:12}{RESET}"
            if record.levelno >= logging.WARNING:
                message = f"{level_color}{message}{RESET}"
        else:
            component = f"{component:12}"

        line = f"{self.formatTime(record, self.datefmt)} | {level} | {component} | {message}"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


_file_handler: logging.FileHandler | None = None


def setup_colored_logging(level=logging.INFO, log_file: str | Path | None = None):
    """
    Route all logging to stdout through the ComponentFormatter.

    Any handlers already on the root logger are replaced.

    Args:
        level: Root logging level
        log_file: Also write an uncoloured copy of the log here
    """
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(ComponentFormatter(color=wants_color(sys.stdout), datefmt="%H:%M:%S"))

    root = logging.getLogger()
    root.handlers = [console]
    root.setLevel(level)

    if log_file:
        add_file_handler(log_file, level)

    # rdflib reports every prefix it generates at INFO
    logging.getLogger("rdflib").setLevel(logging.WARNING)


def add_file_handler(log_file: str | Path, level=logging.DEBUG) -> logging.FileHandler:
    """
    Attach a plain-text log file to the root logger, replacing any earlier one.

    The file is truncated and its directory created if needed.
    """
    global _file_handler
    remove_file_handler()

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(ComponentFormatter(color=False, datefmt="%Y-%m-%d %H:%M:%S"))
    logging.getLogger().addHandler(handler)
    _file_handler = handler

    logging.getLogger(__name__).info("Logging to file: %s", path)
    return handler


def remove_file_handler() -> None:
    """Detach and close the log file handler, if one is attached."""
    global _file_handler
    if _file_handler is None:
        return
    logging.getLogger().removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None
