"""Entry point for quran-tui."""

import logging

from textual.logging import TextualHandler

from quran_tui.app import QuranApp
from quran_tui.config import Config, get_config


def setup_logging(config: Config) -> None:
    """Send log records to the Textual console and, optionally, a file."""
    handlers: list[logging.Handler] = [TextualHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
    )


def main() -> None:
    """Run the quran-tui application."""
    config = get_config()
    setup_logging(config)
    app = QuranApp(config)
    app.run()


if __name__ == "__main__":
    main()
