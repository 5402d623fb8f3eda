from __future__ import annotations

import logging
import os
import sys
import traceback
from logging.handlers import RotatingFileHandler
from datetime import datetime


ROOT_DIR = os.path.normpath(os.path.join(os.path.dirname(__file__), os.pardir, os.pardir))
_LOG_DIR = os.path.normpath(os.getenv("MHFLAUNCHER_LOG_DIR", os.path.join(ROOT_DIR, "debug", "logs")))
_LOG_NAME = "launcher.log"


def ensure_log_dir() -> str:
    os.makedirs(_LOG_DIR, exist_ok=True)
    return _LOG_DIR


def log_file_path() -> str:
    return os.path.join(ensure_log_dir(), _LOG_NAME)


def setup_logging(level: int = logging.DEBUG, console_level: int = logging.INFO) -> logging.Logger:
    """Configure a rotating file logger under debug/logs/launcher.log.

    Returns the configured top-level logger ("mhflauncher").
    """
    logger = logging.getLogger("mhflauncher")
    logger.setLevel(level)

    # Avoid duplicate handlers if called twice
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        fhandler = RotatingFileHandler(log_file_path(), maxBytes=512_000, backupCount=3, encoding="utf-8")
        fhandler.setLevel(logging.DEBUG)
        fhandler.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s"))
        logger.addHandler(fhandler)

    # RotatingFileHandler is itself a StreamHandler subclass
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        ch = logging.StreamHandler()
        ch.setLevel(console_level)
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)

    logger.debug("Logging initialized at %s", log_file_path())
    return logger


def install_excepthook(logger: logging.Logger | None = None) -> None:
    """Install a sys.excepthook that logs uncaught exceptions with traceback.

    Launch failures are not caught anywhere, so this is where they get recorded
    and where the user is pointed at the log.
    """
    lg = logger or logging.getLogger("mhflauncher")

    def _hook(exc_type, exc, tb):
        lg.error("Uncaught exception:")
        for line in traceback.format_exception(exc_type, exc, tb):
            lg.error(line.rstrip())
        # Chain to default hook for console visibility
        sys.__excepthook__(exc_type, exc, tb)
        print(crash_hint(), file=sys.stderr)

    sys.excepthook = _hook


def log_environment(logger: logging.Logger | None = None) -> None:
    import platform
    lg = logger or logging.getLogger("mhflauncher")
    lg.debug("Platform: %s", platform.platform())
    lg.debug("Python: %s", sys.version.replace("\n", " "))
    lg.debug("CWD: %s", os.getcwd())
    for k in ("MHFLAUNCHER_LOCAL_URL", "MHFLAUNCHER_CUSTOM_HOST", "MHFLAUNCHER_MHF_FOLDER", "MHFLAUNCHER_RUNTIME_CMD"):
        lg.debug("%s: %s", k, os.environ.get(k, "<unset>"))


def crash_hint() -> str:
    """Return a short hint with the log file location to show users."""
    lf = log_file_path()
    ts = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    return f"[{ts}] See log for details: {lf}"
