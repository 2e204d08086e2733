"""
aws_ip/exceptions.py - 예외 계층 구조

패키지에서 발생하는 모든 예외는 AWSIPError를 상속하므로, 호출자는 경계에서
단일 타입으로 잡을 수 있습니다.

예외 계층 구조:
    AWSIPError (베이스)
    ├── ConfigError          잘못된 TTL, 캐시 키, 설정
    ├── FetchError           HTTP/전송 실패 또는 디코딩 불가 payload
    ├── CacheError
    │   ├── CacheMissError       없거나 만료된 엔트리에 get()
    │   └── CorruptCacheError    저장된 바이트 디코딩 실패
    ├── DatasetDecodeError   와이어 포맷 위반 (내부 코덱 에러)
    └── InvalidAddressError  잘못된 IP 리터럴

Usage:
    from aws_ip.exceptions import AWSIPError, FetchError

    try:
        dataset = aws.get_dataset()
    except FetchError as e:
        print(e.url, e.status_code, e.reason)
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class AWSIPError(Exception):
    """aws_ip 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """예외 정보를 딕셔너리로 반환"""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "cause": str(self.cause) if self.cause else None,
            "details": self.details,
        }


# =============================================================================
# 설정 관련 예외
# =============================================================================


class ConfigError(AWSIPError):
    """잘못된 설정 (생성 시점에 발생)"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"Configuration error [{key}]: {message}"
        super().__init__(full_message, cause)
        self.config_key = key
        self.details["config_key"] = key


# =============================================================================
# 다운로드 관련 예외
# =============================================================================


class FetchError(AWSIPError):
    """데이터셋 다운로드 실패

    전송 계층 실패(DNS, TLS, 타임아웃)는 status_code가 None입니다.
    """

    def __init__(
        self,
        url: str,
        status_code: Optional[int],
        reason: str,
        cause: Optional[Exception] = None,
    ):
        code = status_code if status_code is not None else "-"
        message = f"Error requesting {url} {code} {reason}"
        super().__init__(message, cause)
        self.url = url
        self.status_code = status_code
        self.reason = reason
        self.details.update(
            {
                "url": url,
                "status_code": status_code,
                "reason": reason,
            }
        )


# =============================================================================
# 캐시 관련 예외
# =============================================================================


class CacheError(AWSIPError):
    """캐시 저장소 관련 예외"""

    def __init__(
        self,
        key: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.key = key
        self.details["key"] = key


class CacheMissError(CacheError, KeyError):
    """없거나 만료된 키에 get() 호출"""

    def __init__(self, key: str):
        super().__init__(key, f"No live cache entry for key '{key}'")


class CorruptCacheError(CacheError):
    """저장된 바이트를 디코딩할 수 없음"""

    def __init__(
        self,
        key: str,
        reason: str,
        cause: Optional[Exception] = None,
    ):
        super().__init__(key, f"Corrupt cache entry [{key}]: {reason}", cause)
        self.reason = reason
        self.details["reason"] = reason


# =============================================================================
# 데이터셋 / 조회 관련 예외
# =============================================================================


class DatasetDecodeError(AWSIPError):
    """ip-ranges.json 와이어 포맷과 맞지 않는 payload"""

    def __init__(self, reason: str, cause: Optional[Exception] = None):
        super().__init__(f"Invalid ip-ranges document: {reason}", cause)
        self.reason = reason


class InvalidAddressError(AWSIPError, ValueError):
    """잘못된 IP 주소 리터럴"""

    def __init__(self, address: Any, cause: Optional[Exception] = None):
        super().__init__(f"Invalid IP address: {address!r}", cause)
        self.address = address
        self.details["address"] = str(address)


# =============================================================================
# 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """명령줄 표시용 예외 메시지 포맷팅

    Args:
        error: 포맷팅할 예외

    Returns:
        사용자 친화적 메시지
    """
    if isinstance(error, AWSIPError):
        return str(error)
    return f"{error.__class__.__name__}: {error}"
