"""
aws_ip/cli/console.py - Rich 콘솔 유틸리티

CLI의 일관된 콘솔 출력을 위한 함수들. 결과는 stdout, 상태와 에러는
stderr로 출력하여 파이프 출력이 섞이지 않게 합니다.
"""

import logging
from datetime import datetime

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


def setup_logging(verbose: bool = False) -> logging.Logger:
    """패키지 logger 설정

    stderr 콘솔의 RichHandler 하나를 붙입니다. 기본 레벨은 WARNING이라
    명령 출력과 섞이지 않으며, --verbose면 DEBUG입니다.

    Args:
        verbose: 디버그 로그 활성화

    Returns:
        logging.Logger: "aws_ip" logger
    """
    logger = logging.getLogger("aws_ip")
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    # 이미 설정됨
    if any(isinstance(h, RichHandler) for h in logger.handlers):
        return logger

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger


# =============================================================================
# 출력 스타일
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"
SYMBOL_INFO = "•"


def print_success(message: str) -> None:
    err_console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    err_console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    err_console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


def format_timestamp(ts: float) -> str:
    """epoch 초를 로컬 'YYYY-MM-DD HH:MM:SS'로"""
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M:%S")


def format_duration(seconds: float) -> str:
    """남은 시간 (예: '1h 05m', '42s')"""
    seconds = int(seconds)
    if seconds < 60:
        return f"{seconds}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{minutes}m {secs:02d}s"
    hours, minutes = divmod(minutes, 60)
    return f"{hours}h {minutes:02d}m"


def create_table(title: str | None, columns: list[str]) -> Table:
    """표준 헤더 스타일의 테이블"""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    for column in columns:
        table.add_column(column)
    return table
