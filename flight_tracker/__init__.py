"""
Flight Tracker Backend Package.

Thin proxy over the OpenSky Network API built with Flask, requests and NumPy.

Modules:
    api/         REST endpoints for flights, regions, statistics and diagnostics
    models/      Flight records and pagination
    ingestion/   OAuth2 token acquisition and OpenSky state-vector fetching
    analytics/   Region filtering and NumPy-based statistics
    services/    External API integrations (AviationStack route lookups)
    cache.py     In-memory expiring cache for the token and flight list
    retry.py     Retry policy with exponential backoff
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
