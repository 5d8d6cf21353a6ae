"""
Centralized configuration management.

Configuration is loaded from:
1. Environment variables
2. .env file (if present)
3. Default values

Usage:
    from idscan.config import get_config
    config = get_config()
    print(config.batch.max_workers)  # 3 unless BATCH_MAX_WORKERS is set
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple


def _load_dotenv(dotenv_path: Optional[Path] = None) -> None:
    """
    Minimal .env loader.

    Supports KEY=VALUE, ignores blank lines and comments (#).
    Does not override existing environment variables.
    """
    if dotenv_path is None:
        dotenv_path = Path(__file__).resolve().parent.parent / ".env"

    if not dotenv_path.exists() or not dotenv_path.is_file():
        return

    for raw_line in dotenv_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if not key:
            continue
        # Only set if not already in environment
        if os.getenv(key) in (None, ""):
            os.environ[key] = value


# Load .env on module import
_load_dotenv()


def _get_bool_env(key: str, default: bool = False) -> bool:
    """Get boolean from environment variable."""
    value = os.getenv(key, "").strip().lower()
    if value in ("1", "true", "yes", "on"):
        return True
    if value in ("0", "false", "no", "off"):
        return False
    return default


def _get_int_env(key: str, default: int) -> int:
    """Get integer from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float from environment variable."""
    value = os.getenv(key, "").strip()
    if not value:
        return default
    try:
        return float(value)
    except ValueError:
        return default


@dataclass
class OCRConfig:
    """OCR (Tesseract) configuration."""
    languages: str = field(default_factory=lambda: os.getenv("OCR_LANGUAGES", "eng"))
    tesseract_path: str = field(default_factory=lambda: os.getenv("TESSERACT_PATH", ""))
    psm: int = field(default_factory=lambda: _get_int_env("OCR_PSM", 6))
    oem: int = field(default_factory=lambda: _get_int_env("OCR_OEM", 3))

    @property
    def tesseract_config(self) -> str:
        return f"--psm {self.psm} --oem {self.oem}"


@dataclass
class RegionConfig:
    """
    Identity-region crop geometry.

    All values are fractions of the detected content box. The defaults were
    tuned against the standard front-side card layout.
    """
    brightness_threshold: int = field(
        default_factory=lambda: _get_int_env("REGION_BRIGHTNESS_THRESHOLD", 128)
    )
    content_margin: float = field(default_factory=lambda: _get_float_env("REGION_CONTENT_MARGIN", 0.05))
    left: float = field(default_factory=lambda: _get_float_env("REGION_LEFT", 0.05))
    top: float = field(default_factory=lambda: _get_float_env("REGION_TOP", 0.08))
    width: float = field(default_factory=lambda: _get_float_env("REGION_WIDTH", 0.40))
    height: float = field(default_factory=lambda: _get_float_env("REGION_HEIGHT", 0.40))

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)


@dataclass
class BatchConfig:
    """Batch processing limits."""
    max_workers: int = field(default_factory=lambda: _get_int_env("BATCH_MAX_WORKERS", 3))
    timeout_sec: float = field(default_factory=lambda: _get_float_env("BATCH_TIMEOUT_SEC", 60.0))
    dual_pass: bool = field(default_factory=lambda: _get_bool_env("DUAL_PASS", True))
    pass_workers: int = field(default_factory=lambda: _get_int_env("PASS_WORKERS", 2))


@dataclass
class ExtractionConfig:
    """Text post-processing and field extraction tuning."""
    similarity_threshold: float = field(
        default_factory=lambda: _get_float_env("SIMILARITY_THRESHOLD", 0.7)
    )
    alignment_window: int = field(default_factory=lambda: _get_int_env("ALIGNMENT_WINDOW", 2))
    max_token_drift: int = field(default_factory=lambda: _get_int_env("MAX_TOKEN_DRIFT", 5))
    mobile_scan_limit: int = field(default_factory=lambda: _get_int_env("MOBILE_SCAN_LIMIT", 2000))


@dataclass
class Config:
    """
    Main application configuration.

    All settings are loaded from environment variables with sensible defaults.
    Set DEBUG=1 in environment to enable debug mode.
    """

    # Base directory (project root)
    base_dir: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    logs_dir: Path = field(default=None)

    # Debug mode (enables verbose logging and raw OCR dumps)
    debug: bool = field(default_factory=lambda: _get_bool_env("DEBUG", False))
    log_to_file: bool = field(default_factory=lambda: _get_bool_env("LOG_TO_FILE", True))

    # Sub-configurations
    ocr: OCRConfig = field(default_factory=OCRConfig)
    region: RegionConfig = field(default_factory=RegionConfig)
    batch: BatchConfig = field(default_factory=BatchConfig)
    extraction: ExtractionConfig = field(default_factory=ExtractionConfig)

    def __post_init__(self):
        """Resolve paths after initialization."""
        if self.logs_dir is None:
            self.logs_dir = self.base_dir / os.getenv("LOG_DIR", "logs")

    @property
    def dump_raw_ocr(self) -> bool:
        """Whether to log raw OCR output (enabled in debug mode)."""
        return self.debug or _get_bool_env("DUMP_RAW_OCR", False)


# Global config instance (lazily initialized)
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def reset_config() -> None:
    """Reset the global configuration (useful for testing)."""
    global _config
    _config = None
