"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 Rich 로깅 핸들러 설정을 위한 함수들
"""

from __future__ import annotations

import logging
import platform
from collections.abc import Iterable

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from core.config import LogConfig
from core.data.subnets import Subnet

# botocore 노이즈 로그 제한
NOISY_LOGGERS = (
    "botocore.httpchecksum",
    "botocore.credentials",
    "botocore.loaders",
    "botocore.session",
    "botocore.hooks",
    "urllib3.connectionpool",
)


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    is_windows = platform.system().lower() == "windows"

    return Console(
        stderr=stderr,
        color_system="auto",
        highlight=False,
        soft_wrap=True,
        markup=True,
        emoji=not is_windows,
    )


# 전역 콘솔 인스턴스 (결과는 stdout, 로그는 stderr)
console = get_console()
err_console = get_console(stderr=True)


def setup_logging(config: LogConfig | None = None, verbose: bool = False) -> None:
    """루트 logger에 Rich 핸들러 설정

    Args:
        config: 로깅 설정 (None이면 환경변수에서 로드)
        verbose: True면 레벨과 무관하게 DEBUG
    """
    config = config or LogConfig.from_env()
    level = logging.DEBUG if verbose else getattr(logging, config.level, logging.WARNING)

    root = logging.getLogger()
    root.setLevel(level)

    # 이미 Rich 핸들러가 있으면 레벨만 갱신
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s", datefmt=config.date_format))
        root.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


# =============================================================================
# 표준 출력 스타일
# =============================================================================

SYMBOL_SUCCESS = "✓"
SYMBOL_ERROR = "✗"
SYMBOL_WARNING = "!"


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {message}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {message}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {message}[/yellow]")


def print_subnet_table(subnets: Iterable[Subnet], title: str | None = None) -> None:
    """서브넷 목록을 테이블로 출력

    Args:
        subnets: 출력할 서브넷
        title: 테이블 제목
    """
    table = Table(title=title, show_lines=False)
    table.add_column("Subnet ID", style="cyan", no_wrap=True)
    table.add_column("Name")
    table.add_column("AZ")
    table.add_column("VPC")
    table.add_column("CIDR")
    table.add_column("Free IPs", justify="right")

    for subnet in subnets:
        table.add_row(
            subnet.subnet_id,
            subnet.name,
            subnet.availability_zone,
            subnet.vpc_id,
            subnet.cidr_block,
            str(subnet.available_ip_count),
        )

    console.print(table)
