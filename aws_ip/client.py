"""
aws_ip/client.py - AWSIP 파사드

Usage:
    from aws_ip import AWSIP

    aws = AWSIP(600, "/tmp/aws_ip_cache")
    cidrs = aws.all_cidrs()
    ec2_cidrs = aws.cidrs_by_service("EC2")

    # 엔트리가 만료되면 다음 호출에서 다시 다운로드
    aws.is_aws_ip("52.94.76.1", service="AMAZON")

여러 프로세스에서 같은 cache_path를 주면 다운로드 하나를 공유합니다.
cache_path가 없으면 인스턴스마다 별도 임시 디렉토리를 사용합니다.
"""

from __future__ import annotations

from aws_ip.cache.store import CacheEntryInfo, FileCache
from aws_ip.config import DATASET_URL, DEFAULT_TIMEOUT, Settings, validate_ttl, validate_url
from aws_ip.ip_ranges import query
from aws_ip.ip_ranges.fetcher import DatasetFetcher
from aws_ip.ip_ranges.models import Dataset, PrefixEntry
from aws_ip.ip_ranges.refresh import CacheStore, Fetcher, RefreshController


class AWSIP:
    """캐시와 자동 갱신을 지원하는 AWS IP 대역 조회

    모든 조회는 갱신 컨트롤러를 거치므로 결과가 캐시 TTL보다 오래되지
    않습니다.

    Args:
        cache_ttl_seconds: 캐시 수명 (양의 정수)
        cache_path: 공유 캐시 디렉토리 (None이면 새 임시 디렉토리)
        url: 데이터셋 URL (https만 허용)
        timeout: HTTP 타임아웃(초)
        fetcher: 대체 다운로더 (테스트용)
        store: 대체 캐시 저장소 (테스트용)

    Raises:
        ConfigError: 잘못된 TTL 또는 URL. 디스크/네트워크 접근 전에 검사
    """

    def __init__(
        self,
        cache_ttl_seconds: int,
        cache_path: str | None = None,
        *,
        url: str = DATASET_URL,
        timeout: float = DEFAULT_TIMEOUT,
        fetcher: Fetcher | None = None,
        store: CacheStore | None = None,
    ) -> None:
        ttl = validate_ttl(cache_ttl_seconds)
        validate_url(url)

        self.store = store if store is not None else FileCache(cache_path, ttl)
        self.fetcher = fetcher if fetcher is not None else DatasetFetcher(timeout=timeout)
        self._controller = RefreshController(self.store, self.fetcher, ttl, url=url)

    @classmethod
    def from_settings(cls, settings: Settings) -> AWSIP:
        return cls(
            settings.cache_ttl_seconds,
            settings.cache_path,
            url=settings.url,
            timeout=settings.timeout,
        )

    # -------------------------------------------------------------------------
    # 데이터
    # -------------------------------------------------------------------------

    def get_dataset(self) -> Dataset:
        return self._controller.get_dataset()

    def get_raw_data(self) -> bytes:
        """캐시된 ip-ranges.json 원본 바이트"""
        return self._controller.get_raw_data()

    def refresh(self) -> Dataset:
        """강제 재다운로드"""
        return self._controller.refresh()

    def cache_info(self) -> CacheEntryInfo | None:
        return self._controller.cache_info()

    def clear_cache(self) -> bool:
        """캐시된 데이터셋 삭제 (다음 조회 시 다시 다운로드)"""
        return self.store.remove(self._controller.cache_key)

    # -------------------------------------------------------------------------
    # 조회
    # -------------------------------------------------------------------------

    def all_cidrs(self) -> list[str]:
        return query.all_cidrs(self.get_dataset())

    def cidrs_by_region(self, region: str) -> list[str]:
        return query.cidrs_by_region(self.get_dataset(), region)

    def cidrs_by_service(self, service: str) -> list[str]:
        return query.cidrs_by_service(self.get_dataset(), service)

    def distinct_regions(self) -> set[str]:
        return query.distinct_regions(self.get_dataset())

    def distinct_services(self) -> set[str]:
        return query.distinct_services(self.get_dataset())

    def find_prefixes(self, address: str, service: str | None = None) -> list[PrefixEntry]:
        return query.find_prefixes(self.get_dataset(), address, service)

    def is_aws_ip(self, address: str, service: str | None = None) -> bool:
        """address가 공개 대역에 속하면 True

        Raises:
            InvalidAddressError: address가 IP 리터럴이 아님
        """
        return query.is_aws_ip(self.get_dataset(), address, service)

    # get_* 별칭
    get_cidrs = all_cidrs
    get_cidrs_by_region = cidrs_by_region
    get_cidrs_by_service = cidrs_by_service
    get_regions = distinct_regions
    get_services = distinct_services
