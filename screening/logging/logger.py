import logging
import sys


class Log:
    """Process-wide logging facade for the screening worker.

    Keyword arguments are appended to the message as ``key=value`` pairs so
    that citation keys, document indexes and failure reasons stay greppable.
    """

    _logger: logging.Logger = logging.getLogger("screening")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stdout handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stdout)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @staticmethod
    def _render(message: str, fields: dict[str, object]) -> str:
        if not fields:
            return message
        pairs = " ".join(f"{key}={value}" for key, value in fields.items())
        return f"{message} [{pairs}]"

    @classmethod
    def info(cls, message: str, **fields: object) -> None:
        cls._logger.info(cls._render(message, fields))

    @classmethod
    def error(cls, message: str, **fields: object) -> None:
        cls._logger.error(cls._render(message, fields))

    @classmethod
    def warning(cls, message: str, **fields: object) -> None:
        cls._logger.warning(cls._render(message, fields))

    @classmethod
    def debug(cls, message: str, **fields: object) -> None:
        cls._logger.debug(cls._render(message, fields))
