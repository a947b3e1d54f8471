from django.core.cache import cache
from django.db import transaction

SECTIONS_CACHE_KEY = "sections:active"
SECTIONS_CACHE_TIMEOUT = 60 * 5


def clear_sections_cache():
    """Drop the cached public section list once the current transaction commits."""
    transaction.on_commit(lambda: cache.delete(SECTIONS_CACHE_KEY))
