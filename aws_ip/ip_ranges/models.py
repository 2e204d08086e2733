"""
aws_ip/ip_ranges/models.py - 데이터셋 타입과 와이어 코덱

ip-ranges.json 바이트는 읽는 즉시 불변 레코드로 디코딩됩니다.
이후 단계에서는 원본 JSON 매핑을 직접 다루지 않습니다.

와이어 포맷:
    {
      "syncToken": "1700000000",
      "createDate": "2023-11-14-22-13-20",
      "prefixes": [
        {"ip_prefix": "3.2.34.0/26", "region": "af-south-1", "service": "AMAZON",
         "network_border_group": "af-south-1"}
      ],
      "ipv6_prefixes": [
        {"ipv6_prefix": "2600:1f14::/35", "region": "us-west-2", "service": "EC2",
         "network_border_group": "us-west-2"}
      ]
    }
"""

from __future__ import annotations

import ipaddress
import json
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any

from aws_ip.exceptions import DatasetDecodeError

IPNetwork = ipaddress.IPv4Network | ipaddress.IPv6Network

IPV4_KEY = "ip_prefix"
IPV6_KEY = "ipv6_prefix"

_REQUIRED_FIELDS = ("region", "service")


@dataclass(frozen=True)
class PrefixEntry:
    """리전과 서비스 태그가 붙은 CIDR 블록 하나

    Attributes:
        ip_prefix: CIDR 문자열 (IPv6도 이 필드로 정규화)
        region: 리전 태그 (예: us-east-1, GLOBAL)
        service: 서비스 태그 (예: EC2, AMAZON)
        network_border_group: 네트워크 경계 그룹 (없으면 None)
        prefix_key: 원본 문서에서 읽은 필드명. 비교에서 제외
    """

    ip_prefix: str
    region: str
    service: str
    network_border_group: str | None = None
    prefix_key: str | None = field(default=None, compare=False, repr=False)

    @cached_property
    def network(self) -> IPNetwork:
        return ipaddress.ip_network(self.ip_prefix, strict=False)

    @property
    def version(self) -> int:
        return self.network.version

    @property
    def wire_key(self) -> str:
        """인코딩 시 사용할 필드명 (읽은 필드 우선, 없으면 IP 버전 기준)"""
        if self.prefix_key is not None:
            return self.prefix_key
        return IPV6_KEY if self.version == 6 else IPV4_KEY


@dataclass(frozen=True)
class Dataset:
    """디코딩된 ip-ranges.json 문서

    Attributes:
        sync_token: 배포 버전 (가공 없이 전달)
        create_date: 배포 시각 (가공 없이 전달)
        prefixes: 'prefixes' 항목 뒤에 'ipv6_prefixes' 항목, 각각 문서 순서
    """

    sync_token: str | None
    create_date: str | None
    prefixes: tuple[PrefixEntry, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.prefixes)

    @property
    def ipv4_prefixes(self) -> tuple[PrefixEntry, ...]:
        return tuple(p for p in self.prefixes if p.version == 4)

    @property
    def ipv6_prefixes(self) -> tuple[PrefixEntry, ...]:
        return tuple(p for p in self.prefixes if p.version == 6)

    @classmethod
    def from_dict(cls, data: Any) -> Dataset:
        """파싱된 JSON 문서로 Dataset 생성

        Raises:
            DatasetDecodeError: 와이어 포맷을 따르지 않는 문서
        """
        if not isinstance(data, dict):
            raise DatasetDecodeError(f"expected a JSON object, got {type(data).__name__}")

        raw_prefixes = data.get("prefixes")
        if not isinstance(raw_prefixes, list):
            raise DatasetDecodeError("missing 'prefixes' array")
        raw_ipv6 = data.get("ipv6_prefixes", [])
        if not isinstance(raw_ipv6, list):
            raise DatasetDecodeError("'ipv6_prefixes' is not an array")

        entries = [_decode_entry(item, IPV4_KEY, i) for i, item in enumerate(raw_prefixes)]
        entries += [_decode_entry(item, IPV6_KEY, i) for i, item in enumerate(raw_ipv6)]

        return cls(
            sync_token=_optional_str(data.get("syncToken")),
            create_date=_optional_str(data.get("createDate")),
            prefixes=tuple(entries),
        )

    def to_dict(self) -> dict[str, Any]:
        """from_dict의 역변환 (와이어 필드명 사용)

        항목은 읽어 온 배열로 되돌아갑니다. 'prefixes' 안의 IPv6 CIDR도
        'prefixes'에 남으므로 다시 디코딩하면 같은 순서가 됩니다.
        """
        data: dict[str, Any] = {}
        if self.sync_token is not None:
            data["syncToken"] = self.sync_token
        if self.create_date is not None:
            data["createDate"] = self.create_date
        data["prefixes"] = [_encode_entry(p, IPV4_KEY) for p in self.prefixes if p.wire_key == IPV4_KEY]
        data["ipv6_prefixes"] = [_encode_entry(p, IPV6_KEY) for p in self.prefixes if p.wire_key == IPV6_KEY]
        return data


def decode_dataset(payload: bytes) -> Dataset:
    """ip-ranges.json 원본 바이트 디코딩

    Args:
        payload: 응답 본문 또는 캐시된 바이트

    Returns:
        Dataset

    Raises:
        DatasetDecodeError: UTF-8/JSON 오류 또는 와이어 포맷 위반
    """
    try:
        data = json.loads(payload)
    except (UnicodeDecodeError, ValueError) as e:
        raise DatasetDecodeError("not valid JSON", cause=e) from e
    return Dataset.from_dict(data)


def encode_dataset(dataset: Dataset) -> bytes:
    return json.dumps(dataset.to_dict(), ensure_ascii=False).encode("utf-8")


def _decode_entry(item: Any, prefix_key: str, index: int) -> PrefixEntry:
    if not isinstance(item, dict):
        raise DatasetDecodeError(f"{prefix_key} entry #{index} is not an object")

    for name in (prefix_key, *_REQUIRED_FIELDS):
        if not isinstance(item.get(name), str):
            raise DatasetDecodeError(f"{prefix_key} entry #{index} has no string '{name}'")

    try:
        ipaddress.ip_network(item[prefix_key], strict=False)
    except ValueError as e:
        raise DatasetDecodeError(f"{prefix_key} entry #{index} is not a CIDR: {item[prefix_key]!r}", cause=e) from e

    return PrefixEntry(
        ip_prefix=item[prefix_key],
        region=item["region"],
        service=item["service"],
        network_border_group=_optional_str(item.get("network_border_group")),
        prefix_key=prefix_key,
    )


def _encode_entry(entry: PrefixEntry, prefix_key: str) -> dict[str, str]:
    data = {prefix_key: entry.ip_prefix, "region": entry.region, "service": entry.service}
    if entry.network_border_group is not None:
        data["network_border_group"] = entry.network_border_group
    return data


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    return str(value)
