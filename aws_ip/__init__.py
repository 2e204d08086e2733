# aws_ip/__init__.py
"""
aws_ip - 만료 시각이 있는 공유 디스크 캐시 기반 AWS IP 대역 조회

구조:
    aws_ip/
    ├── cache/          # 만료 파일 캐시 (원자적 쓰기)
    ├── ip_ranges/      # 다운로드, 디코딩, 갱신 컨트롤러, 조회
    ├── cli/            # Click CLI + Rich 출력
    ├── client.py       # AWSIP 파사드
    ├── config.py       # 상수와 Settings
    └── exceptions.py   # 예외 계층

Usage:
    from aws_ip import AWSIP

    aws = AWSIP(600, "/tmp/aws_ip_cache")
    aws.is_aws_ip("52.94.76.1")
"""

from aws_ip.client import AWSIP
from aws_ip.config import CACHE_KEY, DATASET_URL, Settings
from aws_ip.exceptions import (
    AWSIPError,
    CacheMissError,
    ConfigError,
    CorruptCacheError,
    FetchError,
    InvalidAddressError,
)
from aws_ip.ip_ranges import Dataset, PrefixEntry

__version__ = "0.1.0"

__all__: list[str] = [
    "AWSIP",
    "CACHE_KEY",
    "DATASET_URL",
    "Settings",
    # 데이터 타입
    "Dataset",
    "PrefixEntry",
    # 예외
    "AWSIPError",
    "CacheMissError",
    "ConfigError",
    "CorruptCacheError",
    "FetchError",
    "InvalidAddressError",
]
