import logging

import structlog

from paybot.logging_config import _add_service_context, _redact_secrets, setup_logging


def test_secrets_are_redacted():
    event = _redact_secrets(None, "info", {"event": "boot", "jwt_secret": "s3cret", "port": 3000})
    assert event == {"event": "boot", "jwt_secret": "***", "port": 3000}


def test_service_context_does_not_override_bound_values():
    event = _add_service_context(None, "info", {"event": "x", "chain_id": 1})
    assert event["service"] == "paybot"
    assert event["chain_id"] == 1


def test_setup_logging_sets_root_level():
    try:
        setup_logging("warning")
        assert logging.getLogger().level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

        setup_logging("not-a-level", json_logs=False)
        assert logging.getLogger().level == logging.INFO
    finally:
        structlog.reset_defaults()
        logging.getLogger().handlers.clear()
