"""
aws_ip/ip_ranges/fetcher.py - 데이터셋 다운로드

호출당 블로킹 HTTPS GET 한 번. 재시도는 없으며 모든 실패는 FetchError로
발생하고 처리는 호출자가 결정합니다.
"""

from __future__ import annotations

import logging
from urllib.parse import urlparse

import requests

from aws_ip.config import DEFAULT_TIMEOUT
from aws_ip.exceptions import FetchError

logger = logging.getLogger(__name__)


class DatasetFetcher:
    """HTTPS로 원본 바이트 다운로드

    Args:
        timeout: 연결/읽기 타임아웃(초)
        session: 사용할 requests.Session (생략 시 새로 생성)
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        session: requests.Session | None = None,
    ) -> None:
        self.timeout = timeout
        self._session = session or requests.Session()

    def fetch(self, url: str) -> bytes:
        """url을 GET하고 응답 본문 반환

        Raises:
            FetchError: https가 아닌 URL, 전송 실패 또는 2xx가 아닌 상태 코드
        """
        if urlparse(url).scheme != "https":
            raise FetchError(url, None, "refusing to fetch over plain HTTP")

        logger.debug("GET %s (timeout=%ss)", url, self.timeout)
        try:
            response = self._session.get(url, timeout=self.timeout)
        except requests.exceptions.SSLError as e:
            raise FetchError(url, None, "TLS error", cause=e) from e
        except requests.exceptions.Timeout as e:
            raise FetchError(url, None, "timed out", cause=e) from e
        except requests.exceptions.ConnectionError as e:
            raise FetchError(url, None, "connection failed", cause=e) from e
        except requests.exceptions.RequestException as e:
            raise FetchError(url, None, "request failed", cause=e) from e

        if not 200 <= response.status_code < 300:
            raise FetchError(url, response.status_code, response.reason or "HTTP error")

        logger.debug("GET %s -> %d (%d bytes)", url, response.status_code, len(response.content))
        return response.content

    def close(self) -> None:
        self._session.close()
