"""Concrete adapters for the interfaces in ``caseassist.interfaces``.

    configuration/  - HTTP and file configuration providers
    engine/         - headless search engine + httpx search transport
    browser/        - in-memory page location (URL fragment + history)
    storage/        - in-memory session storage
"""
