"""Tagged, colored log output on a rich console."""

import logging

from rich.console import Console
from rich.text import Text

LEVEL_TAGS = {
    logging.DEBUG: ("[DEBUG]", "dim"),
    logging.INFO: ("[INFO]", "bold blue"),
    logging.WARNING: ("[WARN]", "bold yellow"),
    logging.ERROR: ("[ERROR]", "bold red"),
    logging.CRITICAL: ("[ERROR]", "bold red"),
}

LOGGER_NAME = "rocky_media_setup"


class TaggedHandler(logging.Handler):
    """Render each record as a single "[LEVEL] message" line."""

    def __init__(self, console: Console | None = None, level: int = logging.NOTSET):
        super().__init__(level)
        self.console = console or Console()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            tag, style = LEVEL_TAGS.get(record.levelno, LEVEL_TAGS[logging.INFO])
            line = Text(f"{tag} ", style=style)
            line.append(self.format(record))
            self.console.print(line, soft_wrap=True)
        except Exception:
            self.handleError(record)


def setup_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach the tagged handler to the package logger."""
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, TaggedHandler):
            logger.removeHandler(handler)
    logger.addHandler(TaggedHandler(console))
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False
    return logger
