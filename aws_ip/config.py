"""
aws_ip/config.py - 설정

배포 데이터셋 관련 상수와 CLI가 사용하는 Settings 데이터클래스.
환경 변수가 기본값을 제공하고, 명령줄 옵션이 이를 덮어씁니다.

환경 변수:
    AWS_IP_CACHE_TTL    캐시 수명(초, 양의 정수)
    AWS_IP_CACHE_PATH   공유 캐시 디렉토리 (기본: 새 임시 디렉토리)
    AWS_IP_URL          데이터셋 URL (https 필수)
    AWS_IP_TIMEOUT      HTTP 타임아웃(초)

Usage:
    from aws_ip.config import Settings

    settings = Settings.from_env()
    aws = AWSIP(settings.cache_ttl_seconds, settings.cache_path)

    # 명령줄 값이 있는 항목은 환경 변수를 읽지 않음
    settings = Settings.from_env(cache_ttl_seconds=60)
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlparse

from aws_ip.exceptions import ConfigError

DATASET_URL = "https://ip-ranges.amazonaws.com/ip-ranges.json"

# 데이터셋이 저장되는 단일 캐시 키
CACHE_KEY = "AWS_IPS"

DEFAULT_TTL_SECONDS = 24 * 3600
DEFAULT_TIMEOUT = 15.0

ENV_CACHE_TTL = "AWS_IP_CACHE_TTL"
ENV_CACHE_PATH = "AWS_IP_CACHE_PATH"
ENV_URL = "AWS_IP_URL"
ENV_TIMEOUT = "AWS_IP_TIMEOUT"


def validate_ttl(ttl_seconds: object) -> int:
    """TTL이 양의 정수(초)인지 확인

    Args:
        ttl_seconds: 검증할 값

    Returns:
        int로 된 TTL

    Raises:
        ConfigError: int가 아니거나 bool이거나 양수가 아님
    """
    # bool은 int의 하위 클래스. True가 "1초"가 되면 안 됨
    if isinstance(ttl_seconds, bool) or not isinstance(ttl_seconds, int):
        raise ConfigError("cache_ttl_seconds", f"must be a positive integer, got {ttl_seconds!r}")
    if ttl_seconds <= 0:
        raise ConfigError("cache_ttl_seconds", f"must be a positive integer, got {ttl_seconds}")
    return ttl_seconds


def validate_url(url: str) -> str:
    """호스트가 있는 https URL만 허용"""
    parsed = urlparse(url)
    if parsed.scheme != "https" or not parsed.netloc:
        raise ConfigError("url", f"dataset must be fetched over https, got {url!r}")
    return url


def validate_timeout(timeout: object) -> float:
    """양수 초만 허용"""
    if isinstance(timeout, bool) or not isinstance(timeout, (int, float)) or timeout <= 0:
        raise ConfigError("timeout", f"must be a positive number, got {timeout!r}")
    return float(timeout)


def _parse_env(env: Mapping[str, str], name: str, convert: type, label: str) -> Any:
    raw = env.get(name)
    if not raw:
        return None
    try:
        return convert(raw)
    except ValueError as e:
        raise ConfigError(name, f"not {label}: {raw!r}", cause=e) from e


@dataclass
class Settings:
    """실행 설정

    Attributes:
        cache_ttl_seconds: 캐시 수명(초)
        cache_path: 공유 캐시 디렉토리 (None이면 프로세스 전용 임시 디렉토리)
        url: 데이터셋 URL
        timeout: HTTP 타임아웃(초)
    """

    cache_ttl_seconds: int = DEFAULT_TTL_SECONDS
    cache_path: str | None = None
    url: str = DATASET_URL
    timeout: float = DEFAULT_TIMEOUT

    def __post_init__(self) -> None:
        validate_ttl(self.cache_ttl_seconds)
        validate_url(self.url)
        self.timeout = validate_timeout(self.timeout)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides: Any) -> Settings:
        """환경 변수로 설정 생성

        overrides에 값(None 제외)이 있는 필드는 해당 환경 변수를 읽지 않으므로,
        잘못된 환경 변수가 있어도 명령줄 값이 우선합니다.

        Args:
            environ: os.environ 대신 읽을 매핑
            **overrides: 필드별 명시 값 (cache_ttl_seconds, cache_path, url, timeout)

        Returns:
            Settings 인스턴스

        Raises:
            ConfigError: 설정된 변수를 해석할 수 없음, 또는 최종 값이 유효하지 않음
        """
        env = os.environ if environ is None else environ
        given = {name: value for name, value in overrides.items() if value is not None}

        if "cache_ttl_seconds" not in given:
            ttl = _parse_env(env, ENV_CACHE_TTL, int, "an integer")
            if ttl is not None:
                given["cache_ttl_seconds"] = ttl
        if "timeout" not in given:
            timeout = _parse_env(env, ENV_TIMEOUT, float, "a number")
            if timeout is not None:
                given["timeout"] = timeout
        if "cache_path" not in given and env.get(ENV_CACHE_PATH):
            given["cache_path"] = env[ENV_CACHE_PATH]
        if "url" not in given and env.get(ENV_URL):
            given["url"] = env[ENV_URL]

        return cls(**given)
