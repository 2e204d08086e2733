"""
aws_ip/ip_ranges/refresh.py - 캐시 기반 데이터셋 갱신

캐시된 사본과 새 다운로드 중 하나를 선택합니다:

    exists(CACHE_KEY)?
    ├── yes → get → decode → Dataset     (디코딩 실패: CorruptCacheError)
    └── no  → fetch → decode → put → Dataset
                     (다운로드 실패: FetchError, 만료 사본으로 대체하지 않음)

손상된 캐시 엔트리는 조용히 재다운로드하지 않고 에러로 처리합니다.
디코딩되지 않는 다운로드 payload는 FetchError로 보고되며 캐시에
기록되지 않습니다.
"""

from __future__ import annotations

import logging
from typing import Protocol

from aws_ip.cache.store import CacheEntryInfo
from aws_ip.config import CACHE_KEY, DATASET_URL, validate_ttl
from aws_ip.exceptions import CacheMissError, CorruptCacheError, DatasetDecodeError, FetchError

from .models import Dataset, decode_dataset

logger = logging.getLogger(__name__)


class CacheStore(Protocol):
    def exists(self, key: str) -> bool: ...

    def get(self, key: str) -> bytes: ...

    def put(self, key: str, data: bytes, ttl: int | None = None) -> CacheEntryInfo | None: ...

    def info(self, key: str) -> CacheEntryInfo | None: ...

    def remove(self, key: str) -> bool: ...


class Fetcher(Protocol):
    def fetch(self, url: str) -> bytes: ...


class RefreshController:
    """캐시에서 데이터셋을 제공하고, 엔트리가 없으면 다운로드

    Args:
        store: 만료 캐시 저장소
        fetcher: 데이터셋 다운로더
        ttl_seconds: 다운로드 후 기록하는 엔트리의 수명
        url: 데이터셋 URL
        cache_key: 데이터셋 저장 키
    """

    def __init__(
        self,
        store: CacheStore,
        fetcher: Fetcher,
        ttl_seconds: int,
        url: str = DATASET_URL,
        cache_key: str = CACHE_KEY,
    ) -> None:
        self.ttl_seconds = validate_ttl(ttl_seconds)
        self.store = store
        self.fetcher = fetcher
        self.url = url
        self.cache_key = cache_key

    def get_dataset(self) -> Dataset:
        """디코딩된 데이터셋 반환 (유효하면 캐시에서)"""
        cached = self._load_cached()
        if cached is not None:
            return self._decode_cached(cached)
        return self.refresh()

    def get_raw_data(self) -> bytes:
        """데이터셋 원본 바이트 반환 (유효하면 캐시에서)"""
        cached = self._load_cached()
        if cached is not None:
            return cached
        payload, _ = self._fetch_and_store()
        return payload

    def refresh(self) -> Dataset:
        """캐시 상태와 관계없이 다운로드 후 검증하여 저장"""
        _, dataset = self._fetch_and_store()
        return dataset

    def cache_info(self) -> CacheEntryInfo | None:
        return self.store.info(self.cache_key)

    def _load_cached(self) -> bytes | None:
        if not self.store.exists(self.cache_key):
            logger.debug("Cache miss: %s", self.cache_key)
            return None
        try:
            data = self.store.get(self.cache_key)
        except CacheMissError:
            # exists()와 get() 사이에 만료
            logger.debug("Cache entry %s expired during read", self.cache_key)
            return None
        logger.debug("Cache hit: %s", self.cache_key)
        return data

    def _decode_cached(self, data: bytes) -> Dataset:
        try:
            return decode_dataset(data)
        except DatasetDecodeError as e:
            raise CorruptCacheError(self.cache_key, e.reason, cause=e) from e

    def _fetch_and_store(self) -> tuple[bytes, Dataset]:
        payload = self.fetcher.fetch(self.url)
        try:
            dataset = decode_dataset(payload)
        except DatasetDecodeError as e:
            raise FetchError(self.url, None, f"invalid payload ({e.reason})", cause=e) from e

        self.store.put(self.cache_key, payload, self.ttl_seconds)
        logger.debug("Stored %d prefixes under %s", len(dataset), self.cache_key)
        return payload, dataset
