"""
ledger_config -- single public entrypoint for ledger settings.

Responsibility:
    ``get_active_settings()`` is the only way runtime code obtains
    configuration.  The kernel MUST NEVER import from ``ledger_config``;
    ``ledger_services`` reads settings and passes plain values down.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ledger_config.loader import load_settings
from ledger_config.schema import LedgerSettings

_logger = logging.getLogger("ledger_kernel.config")

DEFAULT_SETTINGS_FILE = Path(__file__).parent / "sets" / "default.yaml"


def get_active_settings(path: Path | None = None) -> LedgerSettings:
    """Load settings from ``path`` (or the bundled default set) and the environment."""
    settings = load_settings(path or DEFAULT_SETTINGS_FILE)
    _logger.info(
        "LEDGER_CONFIG_TRACE",
        extra={
            "source": str(path or DEFAULT_SETTINGS_FILE),
            "deposit_limit_ratio": str(settings.deposit_limit_ratio),
            "best_clients_default_limit": settings.best_clients_default_limit,
        },
    )
    return settings


__all__ = ["LedgerSettings", "get_active_settings", "load_settings"]
