"""Console logging for the fare analyzer.

Streamlit re-executes the app script on every widget interaction, so
`setup_logging` may run many times per session. It installs a single tagged
stdout handler and only swaps that one, leaving handlers other tools attach
to the root logger alone.
"""

import logging
import sys

LOG_FORMAT = '%(asctime)s %(levelname)-8s %(name)s:%(lineno)d %(message)s'
DATE_FORMAT = '%H:%M:%S'

# Chatty third-party loggers kept at WARNING regardless of the app level
QUIET_LOGGERS = ('urllib3', 'watchdog', 'PIL')

_HANDLER_NAME = 'fare-console'


class _LevelColorFormatter(logging.Formatter):
    """Colours the level name only; the message stays plain for copy/paste."""

    _COLORS = {
        logging.DEBUG: '\033[2m',
        logging.INFO: '\033[32m',
        logging.WARNING: '\033[33m',
        logging.ERROR: '\033[31m',
        logging.CRITICAL: '\033[1;31m',
    }
    _RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        color = self._COLORS.get(record.levelno)
        if not color:
            return super().format(record)
        record = logging.makeLogRecord(record.__dict__)
        record.levelname = f"{color}{record.levelname}{self._RESET}"
        return super().format(record)


def _resolve_level(level: int | str) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    return resolved if isinstance(resolved, int) else logging.INFO


def setup_logging(level: int | str = logging.INFO) -> logging.Handler:
    level = _resolve_level(level)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setLevel(level)
    formatter_cls = _LevelColorFormatter if sys.stdout.isatty() else logging.Formatter
    handler.setFormatter(formatter_cls(LOG_FORMAT, datefmt=DATE_FORMAT))
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
