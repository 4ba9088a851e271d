import logging
import sys


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable:
    - our own modules log at the configured level
    - uvicorn keeps its access/startup lines
    - other third-party loggers only show WARNING+
    """

    OWN = ("main", "database", "errors", "__main__")

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name in self.OWN or name.startswith("uvicorn"):
            return True
        return record.levelno >= logging.WARNING


def setup_logging(level=logging.INFO) -> None:
    """
    Configure the root logger with one stderr handler.

    Safe to call more than once; existing root handlers are replaced.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.strip().upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    root.setLevel(level)

    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    logging.captureWarnings(True)
