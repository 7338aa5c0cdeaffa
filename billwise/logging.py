import logging
import sys

from billwise.settings import settings

TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
JSON_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"

# Libraries that are chatty at INFO; only let them through when debugging.
NOISY_LOGGERS = ("uvicorn.access", "sqlalchemy.engine")


def configure_logging(level: str | None = None) -> None:
    """Install a single stderr handler on the root logger.

    ``level`` overrides ``settings.log_level`` (the batch script uses this for
    its ``--verbose`` runs). With ``settings.log_json`` the records are emitted
    as one JSON object per line, which is what the log shipper expects.
    """
    name = (level or settings.log_level).upper()
    resolved = getattr(logging, name, logging.INFO)

    handler = logging.StreamHandler(sys.stderr)
    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt=JSON_FORMAT,
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(resolved)
    root.handlers.clear()
    root.addHandler(handler)

    quiet = logging.DEBUG if resolved <= logging.DEBUG else logging.WARNING
    for noisy in NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(quiet)
