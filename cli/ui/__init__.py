# cli/ui - 콘솔 출력 (rich)
"""
콘솔 출력 모듈

검색/업데이트 결과 출력과 로깅 설정
"""

from .console import (
    SYMBOL_ERROR,
    SYMBOL_INFO,
    SYMBOL_SUCCESS,
    SYMBOL_WARNING,
    SanitizeFilter,
    console,
    err_console,
    get_console,
    print_error,
    print_info,
    print_plan_result,
    print_search_result,
    print_success,
    print_table,
    print_warning,
    resolve_log_level,
    setup_logging,
)

__all__ = [
    "SYMBOL_ERROR",
    "SYMBOL_INFO",
    "SYMBOL_SUCCESS",
    "SYMBOL_WARNING",
    "SanitizeFilter",
    "console",
    "err_console",
    "get_console",
    "print_error",
    "print_info",
    "print_plan_result",
    "print_search_result",
    "print_success",
    "print_table",
    "print_warning",
    "resolve_log_level",
    "setup_logging",
]
