"""
Runtime settings read from the environment (and a .env file if present)
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .errors import ConfigError


@dataclass
class Settings:
    tesseract_path: Optional[str] = None
    ocr_language: str = 'eng'
    debug: bool = False
    recovery_workers: int = 1


def load_settings(**overrides):
    """Build Settings from env vars; non-None keyword overrides win"""
    # Load environment variables from .env file
    load_dotenv()

    workers = os.getenv('RECOVERY_WORKERS', '1')
    try:
        recovery_workers = int(workers)
    except ValueError as e:
        raise ConfigError(f"RECOVERY_WORKERS must be an integer, got {workers!r}") from e

    settings = Settings(
        tesseract_path=os.getenv('TESSERACT_PATH') or None,
        ocr_language=os.getenv('OCR_LANGUAGE', 'eng'),
        debug=os.getenv('DEBUG_MODE', 'false').lower() == 'true',
        recovery_workers=recovery_workers,
    )
    for name, value in overrides.items():
        if value is not None:
            setattr(settings, name, value)
    return settings
