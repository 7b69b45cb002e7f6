"""Case-assist search orchestration.

Bootstraps one search engine session per engine id, installs request and
response middleware, composes layered context, keeps the URL fragment in
sync with engine state and routes aria-live announcements.
"""

__version__ = "0.1.0"
