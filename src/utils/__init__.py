from .config import load_config
from .logger import setup_logging

__all__ = [
    "load_config",
    "setup_logging",
]
