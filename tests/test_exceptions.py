"""
tests/test_exceptions.py - 예외 계층 구조 테스트
"""

import pytest

from aws_ip.exceptions import (
    AWSIPError,
    CacheError,
    CacheMissError,
    ConfigError,
    CorruptCacheError,
    DatasetDecodeError,
    FetchError,
    InvalidAddressError,
    format_error_for_user,
)


class TestHierarchy:
    """모든 예외는 AWSIPError 상속"""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigError("cache_ttl_seconds", "must be positive"),
            FetchError("https://example.com", 500, "boom"),
            CacheMissError("AWS_IPS"),
            CorruptCacheError("AWS_IPS", "bad header"),
            DatasetDecodeError("not JSON"),
            InvalidAddressError("x"),
        ],
    )
    def test_base_class(self, error):
        assert isinstance(error, AWSIPError)

    def test_cache_errors(self):
        assert issubclass(CacheMissError, CacheError)
        assert issubclass(CorruptCacheError, CacheError)
        assert issubclass(CacheMissError, KeyError)
        assert issubclass(InvalidAddressError, ValueError)


class TestMessages:
    """문자열 및 딕셔너리 형태"""

    def test_fetch_error_message(self):
        error = FetchError("https://ip-ranges.amazonaws.com/ip-ranges.json", 404, "Not Found")

        assert str(error) == "Error requesting https://ip-ranges.amazonaws.com/ip-ranges.json 404 Not Found"
        assert error.details["status_code"] == 404

    def test_fetch_error_without_status(self):
        error = FetchError("https://example.com", None, "timed out")
        assert "- timed out" in str(error)

    def test_cause_in_message(self):
        cause = ValueError("Expecting value")
        error = DatasetDecodeError("not valid JSON", cause=cause)

        assert str(error) == "Invalid ip-ranges document: not valid JSON: Expecting value"

    def test_cache_miss_message_not_quoted(self):
        assert str(CacheMissError("AWS_IPS")) == "No live cache entry for key 'AWS_IPS'"

    def test_to_dict(self):
        error = ConfigError("cache_ttl_seconds", "must be positive")
        data = error.to_dict()

        assert data["error_type"] == "ConfigError"
        assert data["cause"] is None
        assert data["details"] == {"config_key": "cache_ttl_seconds"}

    def test_format_error_for_user(self):
        assert format_error_for_user(InvalidAddressError("x")) == "Invalid IP address: 'x'"
        assert format_error_for_user(RuntimeError("boom")) == "RuntimeError: boom"
