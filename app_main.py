"""Application entry point for the QuizLive server."""

from __future__ import annotations

from quiz_live.core.settings import get_settings
from quiz_live.server.api_server import run_server
from quiz_live.utils.logging_config import configure_logging


def main() -> None:
    """Initialize logging and serve the quiz over HTTP and Socket.IO."""
    settings = get_settings()
    logger = configure_logging(settings.log_level.upper())
    logger.info("Starting QuizLive on %s:%s", settings.host, settings.port)
    logger.info("Questions are stored in %s", settings.questions_file)
    run_server(settings)


if __name__ == "__main__":
    main()
