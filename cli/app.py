"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 CLI 애플리케이션 진입점입니다.
명령줄 인자를 검증하여 불변 의도(SearchIntent / UpdateIntent)를 한 번 만들고,
코어(core.dynamodb)에 값으로 전달합니다.

명령어 구조:
    ddbm --help
    ddbm --version
    ddbm [--level LEVEL] [--profile NAME] [--region REGION] search NAME [--tag VALUE]
    ddbm [--level LEVEL] [--profile NAME] [--region REGION] search --tag VALUE
    ddbm [--level LEVEL] [--profile NAME] [--region REGION] update TABLE [--ondemand|--provisioned] [--rcu N] [--wcu N]

    예시:
    ddbm search orders                      # 이름 퍼지 검색
    ddbm search --tag commerce              # 태그 값 검색
    ddbm search orders --tag commerce -f json
    ddbm update orders --ondemand           # On-Demand 전환
    ddbm update orders --provisioned        # Provisioned 전환 (현재값 또는 기본 5/5)
    ddbm update orders --rcu 10 --wcu 5     # 처리량 변경

종료 코드:
    0: 성공 (변경 불필요 포함)
    1: 실패 (검증 오류, API 오류, 전환 불가, 목록 조회 실패)
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import NoReturn

import click
from botocore.exceptions import BotoCoreError

from cli.ui.console import (
    print_error,
    print_plan_result,
    print_search_result,
    setup_logging,
)
from core.aws.client import create_session
from core.config import LogConfig, get_default_profile, get_default_region, get_version
from core.dynamodb import (
    BotoTableRepository,
    SearchIntent,
    TableRepository,
    UpdateIntent,
    discover,
    parse_units,
    update,
)
from core.dynamodb.repository import REQUIRED_PERMISSIONS
from core.exceptions import ConfigError, DMError, format_error_for_user, is_access_denied

logger = logging.getLogger(__name__)

VERSION = get_version()


@dataclass(frozen=True)
class AppContext:
    """전역 옵션 (click context obj)"""

    profile: str | None
    region: str
    level: str


def build_repository(app: AppContext) -> TableRepository:
    """전역 옵션으로 boto3 기반 저장소 생성

    Raises:
        ConfigError: 프로파일/자격 증명 설정 오류
    """
    try:
        session = create_session(profile=app.profile, region=app.region)
        return BotoTableRepository.from_session(session, region_name=app.region)
    except BotoCoreError as e:
        raise ConfigError("profile", f"AWS 세션 생성 실패 (profile={app.profile})", cause=e) from e


def _print_permission_hint(error: Exception | None) -> None:
    if is_access_denied(error):
        permissions = REQUIRED_PERMISSIONS["read"] + REQUIRED_PERMISSIONS["write"]
        print_error(f"필요 권한: {', '.join(permissions)}")


def _fail(error: Exception) -> NoReturn:
    print_error(format_error_for_user(error))
    _print_permission_hint(error)
    raise SystemExit(1)


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=VERSION, prog_name="ddbm")
@click.option(
    "--level",
    default=lambda: LogConfig.from_env().level,
    show_default="INFO",
    help="로그 레벨 (debug, info, warn, error)",
)
@click.option("--profile", default=get_default_profile, help="AWS 프로파일 이름")
@click.option("--region", default=get_default_region, help="AWS 리전")
@click.pass_context
def cli(ctx: click.Context, level: str, profile: str | None, region: str) -> None:
    """DynamoDB 테이블 퍼지 검색 및 용량 모드 관리"""
    try:
        setup_logging(level)
    except ConfigError as e:
        _fail(e)
    ctx.obj = AppContext(profile=profile or None, region=region, level=level)


@cli.command()
@click.argument("name", required=False)
@click.option("--tag", "tag_value", default=None, help="테이블 태그 값 (키 무관, 정확히 일치)")
@click.option(
    "-f",
    "--format",
    "output_format",
    type=click.Choice(["console", "json"]),
    default="console",
    help="출력 형식",
)
@click.pass_obj
def search(app: AppContext, name: str | None, tag_value: str | None, output_format: str) -> None:
    """테이블 이름(퍼지) 또는 태그 값으로 테이블 검색"""
    logger.debug("Debug info - passed args listed here:")
    logger.debug("Search Term: %s", name)
    logger.debug("Tag Value: %s", tag_value)
    logger.debug("Profile: %s, Region: %s", app.profile, app.region)

    try:
        intent = SearchIntent(name_pattern=name or None, tag_value=tag_value or None)
        repository = build_repository(app)
    except DMError as e:
        _fail(e)

    result = discover(repository, intent)

    if output_format == "json":
        payload = {
            "tables": [m.to_dict() for m in result.matches],
            "error": result.error.to_dict() if result.error else None,
        }
        click.echo(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        print_search_result(result)

    if not result.ok:
        _print_permission_hint(result.error)
        raise SystemExit(1)


@cli.command(name="update")
@click.argument("table_name")
@click.option("--ondemand", "on_demand", is_flag=True, help="On-Demand 용량 모드로 전환")
@click.option("--provisioned", is_flag=True, help="Provisioned 용량 모드로 전환")
@click.option("--rcu", default=None, help="읽기 용량 단위 (Read Capacity Units)")
@click.option("--wcu", default=None, help="쓰기 용량 단위 (Write Capacity Units)")
@click.pass_obj
def update_cmd(
    app: AppContext,
    table_name: str,
    on_demand: bool,
    provisioned: bool,
    rcu: str | None,
    wcu: str | None,
) -> None:
    """테이블 용량 모드 전환 또는 RCU/WCU 변경"""
    logger.debug("Debug info - passed args listed here:")
    logger.debug("Update Table: %s", table_name)
    logger.debug("RCU Value: %s", rcu)
    logger.debug("WCU Value: %s", wcu)
    logger.debug("Provisioned: %s", provisioned)
    logger.debug("On-Demand: %s", on_demand)

    try:
        intent = UpdateIntent(
            table_name=table_name,
            on_demand=on_demand,
            provisioned=provisioned,
            read_units=parse_units("rcu", rcu),
            write_units=parse_units("wcu", wcu),
        )
        repository = build_repository(app)
        transition = update(repository, intent)
    except DMError as e:
        _fail(e)

    print_plan_result(table_name, transition)


if __name__ == "__main__":
    cli()
