"""Application settings — all configuration loaded from environment variables.

Usage:
    from config.settings import Settings
    settings = Settings()
    settings.validate()   # raises ValueError if FREEBASE_FIXTURES_DIR is unusable
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    """Centralised application configuration.

    All values are read from environment variables at instantiation time
    so that tests can override them by patching ``os.environ``.
    """

    # ── Session ─────────────────────────────────────────────────────────────
    #: Directory holding recorded ``topic/``, ``search/`` and ``image/`` responses.
    fixtures_dir: str = field(
        default_factory=lambda: os.environ.get("FREEBASE_FIXTURES_DIR", "")
    )

    # ── Lookup defaults ─────────────────────────────────────────────────────
    lang: str = field(
        default_factory=lambda: os.environ.get("FREEBASE_LANG", "en")
    )
    search_limit: int = field(
        default_factory=lambda: int(os.environ.get("FREEBASE_SEARCH_LIMIT", "10"))
    )

    # ── Flask ───────────────────────────────────────────────────────────────
    debug: bool = field(
        default_factory=lambda: os.environ.get("FLASK_DEBUG", "0") == "1"
    )
    port: int = field(
        default_factory=lambda: int(os.environ.get("PORT", "5001"))
    )

    def validate(self) -> None:
        """Raise ``ValueError`` if the fixtures directory is unset or missing."""
        if not self.fixtures_dir:
            raise ValueError(
                "FREEBASE_FIXTURES_DIR environment variable is not set. "
                "Copy .env.example to .env and point it at a fixtures directory."
            )
        if not Path(self.fixtures_dir).is_dir():
            raise ValueError(f"Fixtures directory {self.fixtures_dir!r} does not exist.")
