"""
aws_ip/cli/app.py - 메인 CLI 진입점

AWSIP 파사드 위의 Click 기반 명령줄 인터페이스.

명령어 구조:
    aws-ip cidrs [--region R] [--service S]   # CIDR 목록
    aws-ip regions                            # 리전 목록 (중복 제거)
    aws-ip services                           # 서비스 목록 (중복 제거)
    aws-ip check ADDRESS [--service S]        # AWS 주소면 0, 아니면 1로 종료
    aws-ip status                             # 캐시 엔트리 메타데이터
    aws-ip refresh                            # 강제 재다운로드
    aws-ip clear                              # 캐시 엔트리 삭제

전역 옵션은 환경 변수보다 우선합니다 (aws_ip.config 참고):
    aws-ip --ttl 600 --cache-path /tmp/aws_ip_cache cidrs --service EC2

Usage:
    $ aws-ip check 52.94.76.1
    $ python -m aws_ip.cli.app regions
"""

from __future__ import annotations

import functools
from collections.abc import Callable
from typing import Any

import click
from click import Context
from rich.markup import escape

from aws_ip import __version__
from aws_ip.client import AWSIP
from aws_ip.config import Settings
from aws_ip.exceptions import AWSIPError, format_error_for_user
from aws_ip.ip_ranges.query import filter_prefixes

from .console import (
    console,
    create_table,
    format_duration,
    format_timestamp,
    print_error,
    print_info,
    print_success,
    print_warning,
    setup_logging,
)


def handle_errors(func: Callable[..., Any]) -> Callable[..., Any]:
    """AWSIPError를 빨간 메시지와 종료 코드 1로 변환"""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except AWSIPError as e:
            print_error(format_error_for_user(e))
            raise SystemExit(1) from e

    return wrapper


def _get_client(ctx: Context) -> AWSIP:
    """실행당 한 번만 AWSIP 인스턴스 생성"""
    state = ctx.ensure_object(dict)
    if "client" not in state:
        state["client"] = AWSIP.from_settings(state["settings"])
    return state["client"]


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(__version__, "-V", "--version", prog_name="aws-ip")
@click.option("--ttl", "ttl", type=int, default=None, help="캐시 수명(초) (env: AWS_IP_CACHE_TTL)")
@click.option(
    "--cache-path",
    "cache_path",
    type=click.Path(file_okay=False),
    default=None,
    help="공유 캐시 디렉토리 (env: AWS_IP_CACHE_PATH)",
)
@click.option("--timeout", "timeout", type=float, default=None, help="HTTP 타임아웃(초) (env: AWS_IP_TIMEOUT)")
@click.option("-v", "--verbose", is_flag=True, help="디버그 로그 출력")
@click.pass_context
def cli(
    ctx: Context,
    ttl: int | None,
    cache_path: str | None,
    timeout: float | None,
    verbose: bool,
) -> None:
    """AWS IP 대역 검색 (디스크 캐시, 만료 시 자동 갱신)"""
    setup_logging(verbose)

    try:
        settings = Settings.from_env(
            cache_ttl_seconds=ttl,
            cache_path=cache_path or None,
            timeout=timeout,
        )
    except AWSIPError as e:
        print_error(format_error_for_user(e))
        raise SystemExit(1) from e

    ctx.ensure_object(dict)["settings"] = settings


@cli.command()
@click.option("-r", "--region", "region", default=None, help="리전 태그 (정확히 일치, 예: us-east-1)")
@click.option("-s", "--service", "service", default=None, help="서비스 태그 (정확히 일치, 예: EC2)")
@click.pass_context
@handle_errors
def cidrs(ctx: Context, region: str | None, service: str | None) -> None:
    """CIDR 목록 (리전/서비스 필터 선택)"""
    dataset = _get_client(ctx).get_dataset()
    for entry in filter_prefixes(dataset, region=region, service=service):
        click.echo(entry.ip_prefix)


@cli.command()
@click.pass_context
@handle_errors
def regions(ctx: Context) -> None:
    """리전 목록"""
    for region in sorted(_get_client(ctx).distinct_regions()):
        click.echo(region)


@cli.command()
@click.pass_context
@handle_errors
def services(ctx: Context) -> None:
    """서비스 목록"""
    for service in sorted(_get_client(ctx).distinct_services()):
        click.echo(service)


@cli.command()
@click.argument("address")
@click.option("-s", "--service", "service", default=None, help="이 서비스의 대역만 검사")
@click.pass_context
@handle_errors
def check(ctx: Context, address: str, service: str | None) -> None:
    """ADDRESS가 AWS 대역인지 확인 (종료 코드 0 = 예, 1 = 아니오)"""
    matches = _get_client(ctx).find_prefixes(address, service=service)
    if not matches:
        scope = f" ({service})" if service else ""
        print_warning(f"{address} is not in AWS IP ranges{scope}")
        raise SystemExit(1)

    table = create_table(escape(address), ["Prefix", "Region", "Service", "Border group"])
    for entry in matches:
        table.add_row(entry.ip_prefix, entry.region, entry.service, entry.network_border_group or "-")
    console.print(table)
    print_success(f"{address} matches {len(matches)} AWS range(s)")


@cli.command()
@click.pass_context
@handle_errors
def status(ctx: Context) -> None:
    """캐시된 데이터셋 엔트리 표시"""
    client = _get_client(ctx)
    info = client.cache_info()
    if info is None:
        print_info(f"No cached dataset in {client.store.root}")
        return

    now = client.store.now()
    table = create_table("Cache", ["Field", "Value"])
    table.add_row("Key", info.key)
    table.add_row("Path", escape(info.path))
    table.add_row("Created", format_timestamp(info.created_at))
    table.add_row("Expires", format_timestamp(info.expires_at))
    table.add_row("Size", f"{info.size:,} bytes")
    if info.is_valid(now):
        table.add_row("Valid", f"[green]yes[/green] ({format_duration(info.remaining_seconds(now))} left)")
    else:
        table.add_row("Valid", "[red]expired[/red]")
    console.print(table)


@cli.command()
@click.pass_context
@handle_errors
def refresh(ctx: Context) -> None:
    """지금 데이터셋을 다운로드해 캐시 교체"""
    dataset = _get_client(ctx).refresh()
    version = f" (syncToken {dataset.sync_token})" if dataset.sync_token else ""
    print_success(f"Downloaded {len(dataset)} prefixes{version}")


@cli.command()
@click.pass_context
@handle_errors
def clear(ctx: Context) -> None:
    """캐시된 데이터셋 삭제"""
    if _get_client(ctx).clear_cache():
        print_success("Cache cleared")
    else:
        print_info("Nothing to clear")


def main() -> None:
    """aws-ip 콘솔 스크립트 진입점"""
    cli()


if __name__ == "__main__":
    main()
