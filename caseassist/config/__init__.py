"""Configuration module - exports Settings and load_config."""

from caseassist.config.loader import load_config
from caseassist.config.settings import Settings

__all__ = ["Settings", "load_config"]
