"""
cli/ui/console.py - Rich 콘솔 유틸리티

일관된 콘솔 출력과 로깅 설정을 위한 함수들.
결과는 stdout(console), 로그는 stderr(err_console)로 출력합니다.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from core.config import LogConfig
from core.dynamodb.types import DiscoveryResult, Mutate, NoOp, TransitionPlan
from core.exceptions import ConfigError

# botocore 노이즈 로그 제한
logging.getLogger("botocore.httpchecksum").setLevel(logging.WARNING)
logging.getLogger("botocore.credentials").setLevel(logging.WARNING)
logging.getLogger("botocore.loaders").setLevel(logging.WARNING)
logging.getLogger("botocore.session").setLevel(logging.WARNING)

# 로그를 받을 패키지 logger
LOGGER_NAMES = ("core", "cli")

# 명령줄 레벨 이름 → logging 레벨 (대소문자 무시)
LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def get_console(stderr: bool = False) -> Console:
    """Rich Console 인스턴스를 생성하고 반환합니다."""
    return Console(
        stderr=stderr,
        highlight=False,
        soft_wrap=True,
        markup=True,
    )


# 전역 콘솔 인스턴스
console = get_console()
err_console = get_console(stderr=True)


# =============================================================================
# 로깅
# =============================================================================


class SanitizeFilter(logging.Filter):
    """로그 메시지에서 개행 문자(CR/LF) 제거

    테이블 이름이나 태그 값에 포함된 개행으로 로그 라인이 위조되지 않도록 합니다.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        record.msg = message.replace("\n", "").replace("\r", "")
        record.args = None
        return True


def resolve_log_level(level: str) -> int:
    """레벨 이름을 logging 레벨로 변환

    Raises:
        ConfigError: 알 수 없는 레벨 이름
    """
    resolved = LOG_LEVELS.get(level.strip().lower())
    if resolved is None:
        raise ConfigError("level", f"알 수 없는 로그 레벨: {level} (debug, info, warn, error)")
    return resolved


def setup_logging(level: str = "info", config: LogConfig | None = None) -> int:
    """core/cli logger에 RichHandler를 설정합니다.

    여러 번 호출해도 핸들러가 중복되지 않습니다.

    Args:
        level: 로그 레벨 이름 (debug, info, warn, error)
        config: 포맷 설정 (None이면 LogConfig.from_env())

    Returns:
        적용된 logging 레벨
    """
    resolved = resolve_log_level(level)
    config = config or LogConfig.from_env()

    handler = RichHandler(console=err_console, rich_tracebacks=True, show_path=False)
    handler.setFormatter(logging.Formatter(config.format, datefmt=config.date_format))
    handler.addFilter(SanitizeFilter())

    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        for existing in list(logger.handlers):
            if isinstance(existing, RichHandler):
                logger.removeHandler(existing)
        logger.addHandler(handler)
        logger.setLevel(resolved)
        logger.propagate = False

    return resolved


# =============================================================================
# 표준 출력 스타일 (이모지 없이 Rich 스타일만 사용)
# =============================================================================

# 상태 심볼
SYMBOL_SUCCESS = "✓"  # 완료
SYMBOL_ERROR = "✗"  # 에러
SYMBOL_WARNING = "!"  # 경고
SYMBOL_INFO = "•"  # 정보


def print_success(message: str) -> None:
    """성공 메시지 출력 (초록색 체크마크)"""
    console.print(f"[green]{SYMBOL_SUCCESS} {escape(message)}[/green]")


def print_error(message: str) -> None:
    """에러 메시지 출력 (빨간색 X, stderr)"""
    err_console.print(f"[red]{SYMBOL_ERROR} {escape(message)}[/red]")


def print_warning(message: str) -> None:
    """경고 메시지 출력 (노란색 경고)"""
    console.print(f"[yellow]{SYMBOL_WARNING} {escape(message)}[/yellow]")


def print_info(message: str) -> None:
    """정보 메시지 출력 (파란색 정보)"""
    console.print(f"[blue]{SYMBOL_INFO} {escape(message)}[/blue]")


# =============================================================================
# 결과 출력
# =============================================================================


def print_table(
    title: str,
    columns: list[str],
    rows: list[list],
) -> None:
    """테이블 형식으로 데이터를 출력합니다.

    Args:
        title: 테이블 제목
        columns: 컬럼 헤더 리스트
        rows: 행 데이터 리스트
    """
    table = Table(title=title, show_header=True, header_style="bold magenta")

    for column in columns:
        table.add_column(column, overflow="fold")

    for row in rows:
        table.add_row(*[escape(str(cell)) for cell in row])

    console.print(table)


def print_search_result(result: DiscoveryResult) -> None:
    """검색 결과 출력

    목록 조회가 실패했으면 부분 결과임을 함께 표시합니다.
    """
    if result.matches:
        print_table(
            f"Search results ({len(result.matches)})",
            ["Table Name", "ARN"],
            [[m.name, m.identifier] for m in result.matches],
        )
    else:
        print_warning("검색 결과 없음 - 검색 조건을 확인하세요")

    if result.error is not None:
        print_warning(f"목록 조회 실패로 부분 결과입니다: {result.error}")


def print_plan_result(table_name: str, transition: TransitionPlan) -> None:
    """업데이트 결과 출력"""
    if isinstance(transition, NoOp):
        print_info(f"{table_name}: 변경 불필요 ({transition.reason})")
        return

    if not isinstance(transition, Mutate):
        raise TypeError(f"알 수 없는 전환 계획: {transition!r}")

    if transition.read_units is None:
        print_success(f"{table_name}: {transition.target_mode.value} 전환 완료")
    else:
        print_success(
            f"{table_name}: {transition.target_mode.value} "
            f"(RCU: {transition.read_units}, WCU: {transition.write_units}) 적용 완료"
        )
