"""Engine configuration providers.

HttpConfigurationProvider fetches the configuration object from a remote
endpoint; FileConfigurationProvider reads it from a local JSON file (useful
for development and for hosts that bake configuration into the page).
"""

from caseassist.providers.configuration.file_config_provider import FileConfigurationProvider
from caseassist.providers.configuration.http_config_provider import HttpConfigurationProvider

__all__ = ["FileConfigurationProvider", "HttpConfigurationProvider"]
