"""
aws_ip/ip_ranges/query.py - Dataset 읽기 전용 조회

모든 함수는 순수 함수입니다. 필터는 문자열 완전 일치로 비교하며
중복을 포함해 데이터셋 순서를 유지합니다.
"""

from __future__ import annotations

import ipaddress

from aws_ip.exceptions import InvalidAddressError

from .models import Dataset, PrefixEntry

IPAddress = ipaddress.IPv4Address | ipaddress.IPv6Address


def all_cidrs(dataset: Dataset) -> list[str]:
    """데이터셋 순서대로 모든 ip_prefix"""
    return [p.ip_prefix for p in dataset.prefixes]


def cidrs_by_region(dataset: Dataset, region: str) -> list[str]:
    return [p.ip_prefix for p in dataset.prefixes if p.region == region]


def cidrs_by_service(dataset: Dataset, service: str) -> list[str]:
    return [p.ip_prefix for p in dataset.prefixes if p.service == service]


def filter_prefixes(
    dataset: Dataset,
    region: str | None = None,
    service: str | None = None,
) -> list[PrefixEntry]:
    """두 필터에 모두 맞는 항목 (None = 필터 없음)"""
    return [
        p
        for p in dataset.prefixes
        if (region is None or p.region == region) and (service is None or p.service == service)
    ]


def distinct_regions(dataset: Dataset) -> set[str]:
    return {p.region for p in dataset.prefixes}


def distinct_services(dataset: Dataset) -> set[str]:
    return {p.service for p in dataset.prefixes}


def parse_address(address: str) -> IPAddress:
    """IPv4/IPv6 리터럴 파싱 (앞뒤 공백 제거)

    Raises:
        InvalidAddressError: 유효한 주소가 아님 (CIDR 표기 포함)
    """
    if not isinstance(address, str):
        raise InvalidAddressError(address)
    try:
        return ipaddress.ip_address(address.strip())
    except ValueError as e:
        raise InvalidAddressError(address, cause=e) from e


def find_prefixes(dataset: Dataset, address: str, service: str | None = None) -> list[PrefixEntry]:
    """address를 포함하는 네트워크의 항목

    Args:
        dataset: 디코딩된 데이터셋
        address: IPv4 또는 IPv6 리터럴
        service: 특정 서비스 태그로 제한

    Returns:
        데이터셋 순서의 일치 항목

    Raises:
        InvalidAddressError: 잘못된 address
    """
    ip_obj = parse_address(address)
    return [
        p
        for p in dataset.prefixes
        if (service is None or p.service == service) and p.network.version == ip_obj.version and ip_obj in p.network
    ]


def is_aws_ip(dataset: Dataset, address: str, service: str | None = None) -> bool:
    """address가 (해당 서비스의) CIDR 중 하나에 속하면 True"""
    return bool(find_prefixes(dataset, address, service))
