"""
Logging configuration.

We use a YAML logging config (`src/eventrank/config/logging.yaml`) and then apply
runtime overrides from settings (e.g., `EVENTRANK_LOG_LEVEL`).

Configuration is applied once per process: the console handler keeps the `sys.stderr`
it was built with. Pass `force=True` to re-apply.
"""

from __future__ import annotations

import logging.config

from eventrank.config.settings import get_logging_config, get_settings

_configured = False


def configure_logging(*, force: bool = False) -> bool:
    """Configure logging from packaged YAML + settings; returns False when already done."""
    global _configured
    if _configured and not force:
        return False

    settings = get_settings()
    # get_logging_config() is cached; copy before mutating levels.
    config = {k: (dict(v) if isinstance(v, dict) else v) for k, v in get_logging_config().items()}

    level = settings.app.log_level.upper()
    config["root"] = {**config.get("root", {}), "level": level}
    handlers = {}
    for name, handler in config.get("handlers", {}).items():
        if isinstance(handler, dict) and "level" in handler:
            handler = {**handler, "level": level}
        handlers[name] = handler
    config["handlers"] = handlers

    logging.config.dictConfig(config)
    _configured = True
    return True
