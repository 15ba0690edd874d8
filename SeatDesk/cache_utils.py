"""
Simple caching utilities for SeatDesk read endpoints
"""
import logging
from hashlib import md5
from django.conf import settings
from django.core.cache import cache
from rest_framework.response import Response

logger = logging.getLogger(__name__)

EVENTS_LIST_PREFIX = 'events_list'
SEAT_MAP_PREFIX = 'seat_map'


def get_cache_key(prefix: str, *args) -> str:
    """Generate a simple cache key"""
    key_parts = [str(prefix)]
    for arg in args:
        if arg is not None:
            key_parts.append(str(arg))

    cache_key = ":".join(key_parts)
    if len(cache_key) > 200:
        cache_key = f"{prefix}:{md5(cache_key.encode()).hexdigest()}"

    return cache_key


def caching_enabled() -> bool:
    return getattr(settings, 'ENABLE_CACHING', True)


def get_cached_data(cache_key: str):
    """Get data from cache"""
    if not caching_enabled():
        return None
    cached_data = cache.get(cache_key)
    logger.debug("Cache %s: %s", "hit" if cached_data else "miss", cache_key)
    return cached_data


def set_cached_data(cache_key: str, data, timeout: int = 300):
    """Set data in cache"""
    if not caching_enabled():
        return

    cache.set(cache_key, data, timeout)
    logger.debug("Cache set: %s (%ss)", cache_key, timeout)


def cache_api_response(prefix: str, timeout: int = 300):
    """
    Decorator that caches successful API envelopes keyed on path and query string
    """
    def decorator(view_func):
        def wrapper(self, request, *args, **kwargs):
            key_parts = [prefix, request.path, request.method]

            if request.GET:
                params_str = str(sorted(request.GET.items()))
                key_parts.append(md5(params_str.encode()).hexdigest()[:8])

            cache_key = get_cache_key(*key_parts)

            cached_data = get_cached_data(cache_key)
            if cached_data:
                return Response(cached_data)

            response = view_func(self, request, *args, **kwargs)

            if hasattr(response, 'data') and response.data.get('success', False):
                set_cached_data(cache_key, response.data, timeout)

            return response

        return wrapper
    return decorator


def invalidate_events_cache():
    """Clear the cached events list"""
    _clear_cache_pattern(f"{EVENTS_LIST_PREFIX}:*")


def invalidate_seat_map_cache(event_id):
    """Clear the cached seat map of one event"""
    _clear_cache_pattern(f"{SEAT_MAP_PREFIX}:*{event_id}*")


def _clear_cache_pattern(pattern: str):
    """Clear cache entries matching pattern (django-redis only)"""
    if not caching_enabled() or not hasattr(cache, 'delete_pattern'):
        return
    try:
        deleted = cache.delete_pattern(pattern)
        logger.info("Cache cleared: %s keys matching %s", deleted, pattern)
    except Exception:
        # invalidation failures never propagate to the caller
        logger.exception("Cache clear failed for %s", pattern)
