from __future__ import annotations
"""Project-specific lightweight logger wrapper and logging setup utilities.

Components:
  - Lightweight Logger wrapper (bound per module)
  - ColorFormatter & setup_logging

Policy requirements:
  - Concise English messages
  - f-string style (callers pre-format strings)
  - Console: no timestamp
  - Timing helper (measure)
"""
import logging
import time
import sys
import json
from pathlib import Path
from logging.config import dictConfig
from typing import Callable, Any, Optional, Dict

from colorama import init as colorama_init, Fore, Style


LEVEL_STYLE: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {
        "color": Fore.CYAN,
        "style": Style.DIM
    },
    logging.INFO: {
        "color": Fore.GREEN,
        "style": Style.NORMAL
    },
    logging.WARNING: {
        "color": Fore.YELLOW,
        "style": Style.NORMAL
    },
    logging.ERROR: {
        "color": Fore.RED,
        "style": Style.BRIGHT
    },
    logging.CRITICAL: {
        "color": Fore.RED,
        "style": Style.BRIGHT
    },
}


class ColorFormatter(logging.Formatter):

    def format(self, record: logging.LogRecord) -> str:  # noqa: D401
        base = super().format(record)
        spec = LEVEL_STYLE.get(record.levelno)
        if not spec:
            return base
        return f"{spec['style']}{spec['color']}{base}{Style.RESET_ALL}"


def _apply_inline(level: int):
    """Fallback color setup without timestamp (policy)."""
    colorama_init()
    handler = logging.StreamHandler(sys.stdout)
    fmt = "[ %(levelname)5s ] %(name)s : %(message)s"  # no asctime
    handler.setFormatter(ColorFormatter(fmt=fmt))
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.addHandler(handler)
    root.setLevel(level)


def setup_logging(level: int = logging.INFO):
    """Initialize logging.

    Priority:
      1. log.config.json at CWD or project root (dictConfig)
      2. Inline color fallback
    """
    cfg_path_candidates = [
        Path.cwd() / 'log.config.json',
        Path(__file__).resolve().parent.parent / 'log.config.json',
    ]
    for p in cfg_path_candidates:
        if p.is_file():
            try:
                with p.open('r', encoding='utf-8') as f:
                    data = json.load(f)
                colorama_init()
                dictConfig(data)
                logging.getLogger().setLevel(level)  # caller level wins over file
                logging.getLogger(__name__).debug(f"{p} loaded.")
                return
            except Exception as e:  # noqa: BLE001
                print(f"[logging] config load fail {p}: {e}", file=sys.stderr)
                continue
    _apply_inline(level)
    logging.getLogger(__name__).info("fallback inline logging config active")


class Logger:
    """Thin wrapper around a named stdlib logger.

    Usage:
        log = Logger.bind(__name__)
        log.info("message")
    """

    def __init__(self, name: Optional[str] = None):
        self._name = name or __name__

    def debug(self, msg: str) -> None:
        logging.getLogger(self._name).debug(msg)

    def info(self, msg: str) -> None:
        logging.getLogger(self._name).info(msg)

    def warn(self, msg: str) -> None:  # noqa: D401
        logging.getLogger(self._name).warning(msg)

    def exception(self, msg: Any) -> None:
        logging.getLogger(self._name).exception(str(msg))

    @staticmethod
    def bind(name: str) -> "Logger":
        return Logger(name)

    # --- helpers ---
    def measure(self, label: str, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000.0
            self.debug(f"{label} {elapsed_ms:.1f}ms")


__all__ = ["Logger", "setup_logging", "ColorFormatter"]
