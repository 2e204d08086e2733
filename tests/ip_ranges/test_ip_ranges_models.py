"""
tests/ip_ranges/test_ip_ranges_models.py - 데이터셋 코덱 테스트
"""

import ipaddress
import json

import pytest

from aws_ip.exceptions import DatasetDecodeError
from aws_ip.ip_ranges.models import Dataset, PrefixEntry, decode_dataset, encode_dataset


class TestPrefixEntry:
    """PrefixEntry 데이터클래스"""

    def test_ipv4_network(self):
        entry = PrefixEntry(ip_prefix="10.0.0.0/8", region="us-east-1", service="EC2")

        assert entry.version == 4
        assert entry.network == ipaddress.ip_network("10.0.0.0/8")
        assert entry.network_border_group is None

    def test_ipv6_network(self):
        entry = PrefixEntry(ip_prefix="2600:1f14::/35", region="us-west-2", service="EC2")
        assert entry.version == 6

    def test_host_bits_allowed(self):
        """호스트 비트가 있는 prefix도 non-strict로 파싱"""
        entry = PrefixEntry(ip_prefix="10.0.0.5/8", region="r", service="s")
        assert entry.network == ipaddress.ip_network("10.0.0.0/8")

    def test_equality_ignores_cached_network(self):
        a = PrefixEntry(ip_prefix="10.0.0.0/8", region="r", service="s")
        b = PrefixEntry(ip_prefix="10.0.0.0/8", region="r", service="s")
        _ = a.network

        assert a == b

    def test_equality_ignores_prefix_key(self):
        a = PrefixEntry(ip_prefix="10.0.0.0/8", region="r", service="s", prefix_key="ip_prefix")
        b = PrefixEntry(ip_prefix="10.0.0.0/8", region="r", service="s")

        assert a == b

    def test_wire_key_defaults_to_version(self):
        assert PrefixEntry("10.0.0.0/8", "r", "s").wire_key == "ip_prefix"
        assert PrefixEntry("2600:1f14::/35", "r", "s").wire_key == "ipv6_prefix"


class TestDecodeDataset:
    """decode_dataset 테스트"""

    def test_decode_sample(self, sample_payload):
        dataset = decode_dataset(sample_payload)

        assert dataset.sync_token == "1700000000"
        assert dataset.create_date == "2023-11-14-22-13-20"
        assert len(dataset) == 3
        assert [p.ip_prefix for p in dataset.prefixes] == ["10.0.0.0/8", "10.1.0.0/16", "2600:1f14::/35"]
        assert dataset.prefixes[0] == PrefixEntry("10.0.0.0/8", "us-east-1", "EC2", "us-east-1")

    def test_ipv6_normalized(self, sample_payload):
        dataset = decode_dataset(sample_payload)

        assert [p.ip_prefix for p in dataset.ipv6_prefixes] == ["2600:1f14::/35"]
        assert len(dataset.ipv4_prefixes) == 2
        assert dataset.ipv6_prefixes[0].prefix_key == "ipv6_prefix"

    def test_minimal_document(self):
        """'prefixes'만 필수"""
        payload = b'{"prefixes": [{"ip_prefix": "1.2.3.0/24", "region": "r", "service": "s"}]}'
        dataset = decode_dataset(payload)

        assert dataset.sync_token is None
        assert dataset.create_date is None
        assert dataset.prefixes == (PrefixEntry("1.2.3.0/24", "r", "s"),)

    def test_extra_fields_ignored(self):
        payload = json.dumps(
            {
                "prefixes": [{"ip_prefix": "1.2.3.0/24", "region": "r", "service": "s", "extra": 1}],
                "unknown": True,
            }
        ).encode()

        assert len(decode_dataset(payload)) == 1

    def test_duplicates_preserved(self):
        doc = {
            "prefixes": [
                {"ip_prefix": "1.2.3.0/24", "region": "r", "service": "AMAZON"},
                {"ip_prefix": "1.2.3.0/24", "region": "r", "service": "EC2"},
            ]
        }
        dataset = decode_dataset(json.dumps(doc).encode())

        assert [p.ip_prefix for p in dataset.prefixes] == ["1.2.3.0/24", "1.2.3.0/24"]

    @pytest.mark.parametrize(
        "payload",
        [
            b"",
            b"not json",
            b"\xff\xfe",
            b"[]",
            b"{}",
            b'{"prefixes": {}}',
            b'{"prefixes": [1]}',
            b'{"prefixes": [{"ip_prefix": "1.2.3.0/24", "region": "r"}]}',
            b'{"prefixes": [{"ip_prefix": 5, "region": "r", "service": "s"}]}',
            b'{"prefixes": [{"ip_prefix": "not-a-cidr", "region": "r", "service": "s"}]}',
            b'{"prefixes": [], "ipv6_prefixes": {}}',
            b'{"prefixes": [], "ipv6_prefixes": [{"ip_prefix": "2600::/32", "region": "r", "service": "s"}]}',
        ],
    )
    def test_invalid_documents(self, payload):
        with pytest.raises(DatasetDecodeError):
            decode_dataset(payload)


class TestRoundTrip:
    """Dataset -> bytes -> Dataset"""

    def test_encode_decode(self, sample_payload):
        dataset = decode_dataset(sample_payload)
        assert decode_dataset(encode_dataset(dataset)) == dataset

    def test_to_dict_matches_document(self, sample_document):
        assert Dataset.from_dict(sample_document).to_dict() == sample_document

    def test_ipv6_cidr_inside_prefixes_keeps_order(self):
        """'prefixes' 안의 IPv6 CIDR는 'prefixes'로 다시 인코딩되어 순서 유지"""
        doc = {
            "prefixes": [
                {"ip_prefix": "2600:1f14::/35", "region": "us-west-2", "service": "EC2"},
                {"ip_prefix": "10.0.0.0/8", "region": "us-east-1", "service": "EC2"},
            ]
        }
        dataset = Dataset.from_dict(doc)
        decoded = decode_dataset(encode_dataset(dataset))

        assert decoded == dataset
        assert [p.ip_prefix for p in decoded.prefixes] == ["2600:1f14::/35", "10.0.0.0/8"]
        assert dataset.to_dict() == {**doc, "ipv6_prefixes": []}
