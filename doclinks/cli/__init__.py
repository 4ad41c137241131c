"""doclinks command-line interface."""

from doclinks.api.config.DoclinksConfig import DoclinksConfig
from doclinks.api.config.get_home_dir import get_home_dir
from doclinks.utils.logger import configure_logging

from ._create_app import _create_app


def main() -> None:
    """Entry point for the ``doclinks`` command."""
    try:
        level = DoclinksConfig.load().log.level
    except ValueError:
        # Commands report the configuration error themselves
        level = "INFO"
    configure_logging(get_home_dir(), level)
    _create_app()()


__all__ = ["main"]
