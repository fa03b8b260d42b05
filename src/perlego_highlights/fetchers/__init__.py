"""HTTP fetchers for retrieving highlights from the Perlego API."""
from .perlego_api import DEFAULT_BASE_URL, PerlegoClient, PerlegoFetchError

__all__ = ["DEFAULT_BASE_URL", "PerlegoClient", "PerlegoFetchError"]
