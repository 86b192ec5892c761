"""Environment-driven settings."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class Settings:
    """Static settings for a gift builder session.

    Every field can be overridden through a ``GIFT_BUILDER_*`` environment
    variable, read when the class is first imported.
    """

    data_dir: Path = Path(
        os.environ.get("GIFT_BUILDER_DATA_DIR", str(Path.home() / ".gift-builder"))
    )
    storage_key: str = os.environ.get("GIFT_BUILDER_STORAGE_KEY", "gift-builder-config")
    log_level: str = os.environ.get("GIFT_BUILDER_LOG_LEVEL", "WARNING")
    ai_model: str = os.environ.get("GIFT_BUILDER_AI_MODEL", "gemini/gemini-2.5-flash")
    ai_timeout: float = float(os.environ.get("GIFT_BUILDER_AI_TIMEOUT", "30"))
    export_filename: str = os.environ.get("GIFT_BUILDER_EXPORT_FILENAME", "gift-config.json")


settings = Settings()


def configure_logging(level: Optional[str] = None) -> None:
    """Attach a stream handler to the ``gift_builder`` logger."""
    logger = logging.getLogger("gift_builder")
    logger.setLevel((level or settings.log_level).upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
