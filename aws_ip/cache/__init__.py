"""
aws_ip/cache - 만료 시각이 있는 디스크 캐시

구조:
    {cache_root}/
    └── AWS_IPS.cache     ← 헤더 한 줄 + ip-ranges.json 원본 바이트

Usage:
    from aws_ip.cache import FileCache, get_cache_dir

    cache = FileCache(get_cache_dir("/tmp/aws_ip_cache"), ttl_seconds=600)
"""

__all__ = [
    "CacheEntryInfo",
    "FileCache",
    "get_cache_dir",
    "get_cache_path",
]


def __getattr__(name: str):
    """Lazy import - 처음 사용할 때 서브모듈 로드"""
    if name in ("get_cache_dir", "get_cache_path"):
        from . import path

        return getattr(path, name)
    if name in ("CacheEntryInfo", "FileCache"):
        from . import store

        return getattr(store, name)

    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
