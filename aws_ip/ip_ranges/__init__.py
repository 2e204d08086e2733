"""
aws_ip/ip_ranges - AWS 공개 IP 대역

Usage:
    from aws_ip.ip_ranges import RefreshController, cidrs_by_service

    dataset = controller.get_dataset()
    ec2 = cidrs_by_service(dataset, "EC2")
"""

from .fetcher import DatasetFetcher
from .models import (
    Dataset,
    PrefixEntry,
    decode_dataset,
    encode_dataset,
)
from .query import (
    all_cidrs,
    cidrs_by_region,
    cidrs_by_service,
    distinct_regions,
    distinct_services,
    filter_prefixes,
    find_prefixes,
    is_aws_ip,
    parse_address,
)
from .refresh import RefreshController

__all__ = [
    # 데이터 타입
    "Dataset",
    "PrefixEntry",
    "decode_dataset",
    "encode_dataset",
    # 갱신
    "DatasetFetcher",
    "RefreshController",
    # 조회
    "all_cidrs",
    "cidrs_by_region",
    "cidrs_by_service",
    "distinct_regions",
    "distinct_services",
    "filter_prefixes",
    "find_prefixes",
    "is_aws_ip",
    "parse_address",
]
