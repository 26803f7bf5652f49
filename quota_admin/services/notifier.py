import logging
import sys

logger = logging.getLogger(__name__)


class Notifier:
    """User-facing messages. The default implementation writes them to the log."""

    def success(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)

    def error(self, message: str) -> None:
        logger.error(message)


class ConsoleNotifier(Notifier):
    """Prints messages for the operator scripts; errors go to stderr."""

    def success(self, message: str) -> None:
        super().success(message)
        print(message)

    def warning(self, message: str) -> None:
        super().warning(message)
        print(f"Warning: {message}")

    def error(self, message: str) -> None:
        super().error(message)
        print(f"Error: {message}", file=sys.stderr)
