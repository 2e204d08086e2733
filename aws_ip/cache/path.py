"""캐시 경로 유틸리티.

캐시 루트는 호출자가 지정한 디렉토리(프로세스 간 공유) 또는 현재
프로세스 전용 새 임시 디렉토리입니다.
키마다 ``{root}/{key}.cache`` 파일 하나에 대응합니다.

Attributes:
    CACHE_SUFFIX: 캐시 엔트리 파일 확장자.
"""

import os
import re
import tempfile

from aws_ip.exceptions import ConfigError

CACHE_SUFFIX = ".cache"

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_.-]+$")


def get_cache_dir(path: str | None = None) -> str:
    """캐시 루트 디렉토리 반환 (없으면 생성)

    Args:
        path: 공유 캐시 디렉토리. ``None`` 또는 빈 값이면 이 프로세스용
              임시 디렉토리를 새로 생성

    Returns:
        캐시 디렉토리 절대 경로

    Example:
        >>> get_cache_dir("/tmp/aws_ip_cache")
        '/tmp/aws_ip_cache'
    """
    if not path:
        return tempfile.mkdtemp(prefix="aws_ip_")

    cache_dir = os.path.abspath(os.path.expanduser(path))
    os.makedirs(cache_dir, exist_ok=True)
    return cache_dir


def validate_key(key: str) -> str:
    """일반 파일명으로 쓸 수 없는 키 거부

    Raises:
        ConfigError: 빈 키, 경로 구분자 또는 특수 문자
    """
    if not isinstance(key, str) or not _KEY_PATTERN.match(key) or key in (".", ".."):
        raise ConfigError("cache_key", f"invalid cache key {key!r}")
    return key


def get_cache_path(cache_dir: str, key: str) -> str:
    """키의 엔트리 파일 경로 반환

    Args:
        cache_dir: 캐시 루트 디렉토리
        key: 캐시 키 (예: "AWS_IPS")

    Returns:
        엔트리 파일 절대 경로

    Example:
        >>> get_cache_path("/tmp/aws_ip_cache", "AWS_IPS")
        '/tmp/aws_ip_cache/AWS_IPS.cache'
    """
    return os.path.join(cache_dir, f"{validate_key(key)}{CACHE_SUFFIX}")
