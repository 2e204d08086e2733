# tests/cache/test_cache_path.py
"""
aws_ip/cache/path.py 단위 테스트
"""

import os

import pytest

from aws_ip.cache.path import CACHE_SUFFIX, get_cache_dir, get_cache_path, validate_key
from aws_ip.exceptions import ConfigError

# =============================================================================
# get_cache_dir
# =============================================================================


class TestGetCacheDir:
    """get_cache_dir 테스트"""

    def test_creates_given_directory(self, tmp_path):
        target = tmp_path / "shared" / "cache"
        result = get_cache_dir(str(target))

        assert result == str(target)
        assert os.path.isdir(result)

    def test_existing_directory(self, tmp_path):
        assert get_cache_dir(str(tmp_path)) == str(tmp_path)

    def test_returns_absolute_path(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        result = get_cache_dir("relative_cache")

        assert os.path.isabs(result)
        assert result == str(tmp_path / "relative_cache")

    @pytest.mark.parametrize("path", [None, ""])
    def test_temp_directory_when_omitted(self, path):
        result = get_cache_dir(path)

        assert os.path.isdir(result)
        assert os.path.basename(result).startswith("aws_ip_")


# =============================================================================
# get_cache_path / validate_key
# =============================================================================


class TestGetCachePath:
    """get_cache_path 테스트"""

    def test_path_layout(self, tmp_path):
        result = get_cache_path(str(tmp_path), "AWS_IPS")
        assert result == os.path.join(str(tmp_path), "AWS_IPS" + CACHE_SUFFIX)

    @pytest.mark.parametrize("key", ["AWS_IPS", "ip-ranges.v2", "a"])
    def test_valid_keys(self, key):
        assert validate_key(key) == key

    @pytest.mark.parametrize("key", ["", "..", ".", "a/b", "a\\b", "with space", None])
    def test_invalid_keys(self, key):
        with pytest.raises(ConfigError):
            validate_key(key)
