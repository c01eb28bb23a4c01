from typing import Optional

from package_feed.core.settings import FeedSettings
from package_feed.storage.json_serializer import JsonPackagesSerializer
from package_feed.storage.package_cache import PackageCache
from package_feed.storage.serializer import PackagesSerializer

_settings: Optional[FeedSettings] = None
_serializer: Optional[PackagesSerializer] = None
_package_cache: Optional[PackageCache] = None

def get_settings() -> FeedSettings:
    global _settings
    if _settings is None:
        _settings = FeedSettings()
    return _settings

def get_serializer() -> PackagesSerializer:
    global _serializer
    if _serializer is None:
        _serializer = JsonPackagesSerializer(indent=get_settings().indent)
    return _serializer

def get_package_cache() -> PackageCache:
    global _package_cache
    if _package_cache is None:
        settings = get_settings()
        _package_cache = PackageCache(settings.data_dir, get_serializer(), settings.cache_file_name)
    return _package_cache

def reset() -> None:
    """Forget the cached instances so the next call re-reads the environment."""
    global _settings, _serializer, _package_cache
    _settings = None
    _serializer = None
    _package_cache = None
