"""
Logging setup for the bulletin board API.

``setup_logging`` attaches a single console handler to the root logger.
It is safe to call more than once: when the root logger already has
handlers (uvicorn, pytest's caplog) nothing is changed apart from the
level.
"""
import logging

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str = "INFO") -> None:
    root = logging.getLogger()
    root.setLevel(getattr(logging, level.upper(), logging.INFO))
    if root.handlers:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT))
    root.addHandler(handler)

    # SQL echo is controlled by settings.DEBUG, not by the root level.
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
