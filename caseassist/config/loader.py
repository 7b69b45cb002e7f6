"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# _deep_merge does recursive dict merging:
#   base = {"search": {"search_hub": "default"}}
#   overrides = {"search": {"locale": "fr-CA"}}
#   result = {"search": {"search_hub": "default", "locale": "fr-CA"}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from caseassist.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings to merge; read from the environment when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "configuration": {
            "url": settings.configuration_url,
            "file": settings.configuration_file,
        },
        "search": {
            "search_hub": settings.search_hub,
            "pipeline": settings.pipeline,
            "locale": settings.locale,
            "timezone": settings.timezone,
        },
        "interface": {
            "default_query": settings.default_query,
            "disable_state_in_url": settings.disable_state_in_url,
            "skip_first_search": settings.skip_first_search,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
