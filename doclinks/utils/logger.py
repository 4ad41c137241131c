import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

# Prevent multiple configurations
_CONFIGURED = False


def configure_logging(home: Path | None = None, level: str = "INFO") -> None:
    """Configure unified doclinks logging.

    Args:
        home: Path to doclinks home directory. If None, derived from environment.
        level: Root level for the ``doclinks`` logger namespace.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    if home is None:
        env_home = os.environ.get("DOCLINKS_HOME")
        home = Path(env_home).expanduser().resolve() if env_home else Path.home() / ".doclinks"

    home.mkdir(parents=True, exist_ok=True)
    log_file = home / "doclinks.log"

    root_logger = logging.getLogger("doclinks")
    root_logger.setLevel(logging.WARNING if level == "WARN" else level)

    formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=5 * 1024 * 1024,
        backupCount=3,  # 5MB * 3
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)

    # Silence urllib3 retry chatter from requests
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given name.

    Configuration happens explicitly at CLI entry; library use without
    configuration falls through to whatever handlers the host application set.
    """
    return logging.getLogger(f"doclinks.{name}")
