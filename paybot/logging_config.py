"""
structlog setup for the bot process.

JSON lines by default; a colored console renderer when running at DEBUG or
when ``json_logs=False`` is passed. Stdlib module loggers (``paybot.*``) go
through the same processor chain, so both styles end up in one stream.
"""

import logging
import sys
from typing import Any, MutableMapping, Optional

import structlog

from . import __version__
from .config import settings

SECRET_KEYS = frozenset({"app_private_data", "jwt_secret", "authorization"})
QUIET_LOGGERS = ("uvicorn.access", "httpcore", "httpx")


def _redact_secrets(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def _add_service_context(
    _logger: Any, _method: str, event_dict: MutableMapping[str, Any]
) -> MutableMapping[str, Any]:
    event_dict.setdefault("service", "paybot")
    event_dict.setdefault("version", __version__)
    event_dict.setdefault("chain_id", settings.chain_id)
    return event_dict


def setup_logging(log_level: Optional[str] = None, *, json_logs: Optional[bool] = None) -> None:
    """Install structlog and the root stdlib handler.

    Args:
        log_level: Overrides ``settings.log_level``.
        json_logs: Force the renderer; by default DEBUG means console output.
    """
    level_name = (log_level or settings.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    if json_logs is None:
        json_logs = level > logging.DEBUG

    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service_context,
        _redact_secrets,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if json_logs:
        pre_chain.append(structlog.processors.format_exc_info)
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
