"""만료 시각이 있는 파일 캐시.

캐시 루트 아래 키마다 파일 하나를 둡니다. 각 파일은 JSON 헤더 한 줄과
원본 값 바이트로 구성됩니다::

    {"key": "AWS_IPS", "created_at": 1700000000.0, "expires_at": 1700086400.0}
    <raw bytes>

헤더와 본문은 한 번의 원자적 rename으로 함께 게시되므로, 다른 프로세스는
이전 엔트리 또는 새 엔트리 중 하나만 보게 됩니다.

엔트리는 ``now < expires_at`` 동안 유효하며, ``now == expires_at`` 시점에는
이미 만료입니다.

게시되는 파일 권한은 ``0o666 & ~umask``로, 같은 캐시 루트를 쓰는 다른
사용자도 읽을 수 있습니다.

Example:
    ::

        from aws_ip.cache import FileCache

        cache = FileCache("/tmp/aws_ip_cache", ttl_seconds=600)
        if cache.exists("AWS_IPS"):
            data = cache.get("AWS_IPS")
        else:
            cache.put("AWS_IPS", fetch())
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from aws_ip.config import validate_ttl
from aws_ip.exceptions import CacheMissError, CorruptCacheError

from .path import get_cache_dir, get_cache_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntryInfo:
    """저장된 엔트리의 메타데이터"""

    key: str
    path: str
    created_at: float
    expires_at: float
    size: int

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at

    def remaining_seconds(self, now: float) -> float:
        return max(0.0, self.expires_at - now)


class FileCache:
    """디렉토리 기반 키-값 저장소 (엔트리별 만료)

    Args:
        root: 캐시 디렉토리 (None이면 프로세스 전용 임시 디렉토리)
        ttl_seconds: put()으로 쓴 엔트리의 기본 수명
        clock: epoch 초를 반환하는 시간 소스

    Raises:
        ConfigError: ttl_seconds가 양의 정수가 아님. 디렉토리 생성 전에 검사
    """

    def __init__(
        self,
        root: str | None,
        ttl_seconds: int,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.ttl_seconds = validate_ttl(ttl_seconds)
        self._clock = clock
        self.root = get_cache_dir(root)

    def exists(self, key: str) -> bool:
        """key에 값이 있고 만료되지 않았으면 True"""
        record = self._read(key)
        if record is None:
            return False
        info, _ = record
        return info.is_valid(self._clock())

    def get(self, key: str) -> bytes:
        """저장된 바이트 반환

        Raises:
            CacheMissError: 엔트리가 없거나 만료됨
            CorruptCacheError: 엔트리 헤더를 해석할 수 없음
        """
        record = self._read(key)
        if record is None or not record[0].is_valid(self._clock()):
            raise CacheMissError(key)
        return record[1]

    def put(self, key: str, data: bytes, ttl: int | None = None) -> CacheEntryInfo:
        """key에 바이트 저장 (기존 값 교체)

        Args:
            key: 캐시 키
            data: 원본 값
            ttl: 수명(초). 기본값은 저장소의 ttl_seconds

        Returns:
            기록된 엔트리의 메타데이터
        """
        ttl = self.ttl_seconds if ttl is None else validate_ttl(ttl)
        path = Path(get_cache_path(self.root, key))
        now = self._clock()
        header = {"key": key, "created_at": now, "expires_at": now + ttl}
        content = json.dumps(header).encode("utf-8") + b"\n" + bytes(data)

        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=path.parent, suffix=".tmp", prefix=f".{key}_")
        try:
            with open(fd, "wb") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp는 0600으로 생성
            os.chmod(tmp_path, 0o666 & ~_current_umask())
            Path(tmp_path).replace(path)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

        logger.debug("Cache write %s (%d bytes, ttl=%ds)", key, len(data), ttl)
        return CacheEntryInfo(
            key=key,
            path=str(path),
            created_at=now,
            expires_at=now + ttl,
            size=len(data),
        )

    def info(self, key: str) -> CacheEntryInfo | None:
        """만료 여부와 관계없이 엔트리 메타데이터 반환 (없으면 None)"""
        record = self._read(key)
        return record[0] if record else None

    def remove(self, key: str) -> bool:
        """엔트리 파일 삭제

        Returns:
            파일을 삭제했으면 True
        """
        path = Path(get_cache_path(self.root, key))
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        logger.debug("Cache remove %s", key)
        return True

    def now(self) -> float:
        return self._clock()

    def _read(self, key: str) -> tuple[CacheEntryInfo, bytes] | None:
        path = get_cache_path(self.root, key)
        try:
            raw = Path(path).read_bytes()
        except FileNotFoundError:
            return None

        header_line, sep, body = raw.partition(b"\n")
        if not sep:
            raise CorruptCacheError(key, "missing entry header")
        try:
            header = json.loads(header_line)
            created_at = float(header["created_at"])
            expires_at = float(header["expires_at"])
        except (ValueError, KeyError, TypeError) as e:
            raise CorruptCacheError(key, "unreadable entry header", cause=e) from e

        info = CacheEntryInfo(
            key=key,
            path=path,
            created_at=created_at,
            expires_at=expires_at,
            size=len(body),
        )
        return info, body


def _current_umask() -> int:
    # umask는 설정과 동시에만 조회 가능
    mask = os.umask(0)
    os.umask(mask)
    return mask
