import logging
import os
from pathlib import Path
from typing import Optional
from dotenv import load_dotenv

load_dotenv()

PACKAGE_ROOT = Path(__file__).resolve().parent.parent
DEFAULT_PERSONALITY_CONFIG = PACKAGE_ROOT / "config" / "personalities.yaml"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_personality_config_path() -> Path:
    """Helper to resolve the personality weights file, overridable from the environment"""
    return Path(os.getenv("C4ARENA_PERSONALITY_CONFIG", str(DEFAULT_PERSONALITY_CONFIG)))


def get_log_level() -> str:
    return os.getenv("C4ARENA_LOG_LEVEL", "WARNING").upper()


def configure_logging(level: Optional[str] = None):
    logging.basicConfig(level=(level or get_log_level()).upper(), format=LOG_FORMAT)
