"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (priority order):
#
#   1. **Environment variables** - e.g., CONFIGURATION_URL=https://...
#   2. **.env file** - key=value lines in the project root .env file
#
# Field `search_hub` maps to env var `SEARCH_HUB` (case-insensitive).
# Defaults below apply when neither source defines a field.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Case-assist search settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Engine configuration source ===
    # The HTTP endpoint wins when both are set; with neither, no engine
    # can be configured and interfaces stay idle.
    configuration_url: str = ""
    configuration_file: str = ""
    configuration_timeout_seconds: float = 30.0

    # === Search overrides ===
    search_hub: str = "CaseAssist_GenAI"
    pipeline: str = ""
    locale: str = "en-US"
    timezone: str = "UTC"

    # === Context ===
    site_identifier: str = "support"
    is_guest: bool = True
    profile_interests: str = "sailing"
    profile_products_owned: str = "barca skipper pro"

    # === Interface behaviour ===
    default_query: str = "how to enhance working"
    disable_state_in_url: bool = False
    skip_first_search: bool = False

    # === App Config ===
    app_env: str = "development"
    log_level: str = "INFO"

    def identity_profile(self) -> dict[str, str]:
        """Context values describing an authenticated user."""
        profile: dict[str, str] = {}
        if self.profile_interests:
            profile["interests"] = self.profile_interests
        if self.profile_products_owned:
            profile["products_owned"] = self.profile_products_owned
        return profile
