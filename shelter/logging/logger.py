import logging
import sys


class Log:
    """Centralized logging for the shelter admin core.

    Keyword context passed to any level method is appended to the message as
    ``key=value`` pairs (sorted by key), e.g. ``Row rejected entity=animals row=3``.
    """

    _logger: logging.Logger = logging.getLogger("shelter")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a stdout handler once."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def info(cls, message: str, **context: object) -> None:
        cls._emit(logging.INFO, message, context)

    @classmethod
    def error(cls, message: str, **context: object) -> None:
        cls._emit(logging.ERROR, message, context)

    @classmethod
    def warning(cls, message: str, **context: object) -> None:
        cls._emit(logging.WARNING, message, context)

    @classmethod
    def debug(cls, message: str, **context: object) -> None:
        cls._emit(logging.DEBUG, message, context)

    @classmethod
    def _emit(cls, level: int, message: str, context: dict[str, object]) -> None:
        if not cls._logger.isEnabledFor(level):
            return
        cls._logger.log(level, format_message(message, context))


def format_message(message: str, context: dict[str, object]) -> str:
    """Render ``message`` followed by its context pairs."""
    if not context:
        return message
    pairs = " ".join(f"{key}={context[key]}" for key in sorted(context))
    return f"{message} {pairs}"
