"""
tests/conftest.py - pytest 공통 픽스처

Usage:
    def test_something(clock, fetcher, cache_dir):
        # clock: 제어 가능한 시간 소스 (epoch 초)
        # fetcher: 호출 횟수를 세는 가짜 다운로더
        # cache_dir: tmp_path 아래 빈 캐시 디렉토리
        pass
"""

import json
import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 샘플 데이터
# =============================================================================

SAMPLE_DOCUMENT = {
    "syncToken": "1700000000",
    "createDate": "2023-11-14-22-13-20",
    "prefixes": [
        {
            "ip_prefix": "10.0.0.0/8",
            "region": "us-east-1",
            "service": "EC2",
            "network_border_group": "us-east-1",
        },
        {
            "ip_prefix": "10.1.0.0/16",
            "region": "us-west-2",
            "service": "AMAZON",
            "network_border_group": "us-west-2",
        },
    ],
    "ipv6_prefixes": [
        {
            "ipv6_prefix": "2600:1f14::/35",
            "region": "us-west-2",
            "service": "EC2",
            "network_border_group": "us-west-2",
        },
    ],
}


@pytest.fixture
def sample_document():
    """파싱된 ip-ranges.json 문서 (테스트마다 새 복사본)"""
    return json.loads(json.dumps(SAMPLE_DOCUMENT))


@pytest.fixture
def sample_payload():
    """ip-ranges.json 원본 바이트"""
    return json.dumps(SAMPLE_DOCUMENT).encode("utf-8")


# =============================================================================
# 가짜 객체
# =============================================================================


class FakeClock:
    """제어 가능한 시간 소스"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeFetcher:
    """고정 payload를 반환하고 호출을 기록하는 다운로더"""

    def __init__(self, payload: bytes = b"", error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.calls: list[str] = []

    def fetch(self, url: str) -> bytes:
        self.calls.append(url)
        if self.error is not None:
            raise self.error
        return self.payload


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def fetcher(sample_payload):
    return FakeFetcher(sample_payload)


@pytest.fixture
def cache_dir(tmp_path):
    """빈 공유 캐시 디렉토리"""
    path = tmp_path / "aws_ip_cache"
    path.mkdir()
    return str(path)
