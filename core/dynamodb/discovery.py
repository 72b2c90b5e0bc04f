"""
core/dynamodb/discovery.py - 테이블 검색 파이프라인

테이블 이름 퍼지 매칭과 태그 값 일치 두 조건으로 테이블을 찾습니다.
두 조건이 모두 주어지면 AND로 결합합니다.

처리 흐름:
    1. list_names()로 후보 이름 목록 조회 (1회)
    2. 이름 조건: 부분 문자열 포함 또는 유사도 >= FUZZY_MIN_SCORE, 통과 시 describe로 ARN 확인
    3. 태그 조건: describe로 ARN 확인 후 list_tags, 태그 값이 정확히 일치하면 통과 (키는 무시)
    4. 두 조건: 이름 조건 통과 이름만 추려 태그 조건을 적용
    5. 결과는 목록 조회 순서를 유지 (점수 정렬 없음)

후보 단위 실패(describe, list_tags)는 경고 로그 후 건너뜁니다.
목록 조회 자체가 실패하면 그때까지 누적된 결과와 함께 에러를 반환합니다.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from core.exceptions import TransportError

from .intent import SearchIntent
from .repository import TableRepository
from .similarity import FUZZY_MIN_SCORE, is_fuzzy_match, score
from .types import DiscoveryResult, MatchResult

logger = logging.getLogger(__name__)


def discover(
    repository: TableRepository,
    intent: SearchIntent,
    min_score: int = FUZZY_MIN_SCORE,
) -> DiscoveryResult:
    """검색 의도에 맞는 테이블 목록 반환

    Args:
        repository: 테이블 저장소
        intent: 검색 의도 (이름 검색어 / 태그 값)
        min_score: 퍼지 매칭 최소 유사도

    Returns:
        DiscoveryResult (matches + 목록 조회 실패 시 error)
    """
    name_pattern = intent.name_pattern
    tag_value = intent.tag_value
    result = DiscoveryResult()

    try:
        if name_pattern and tag_value:
            logger.info("Begin to search tables via fuzzy name: %s, tag: %s", name_pattern, tag_value)
            names = _filter_names(repository.list_names(), name_pattern, min_score)
            _collect_by_tag(repository, names, tag_value, result)
        elif name_pattern:
            logger.info("Begin to search tables via fuzzy name: %s", name_pattern)
            _collect_by_name(repository, repository.list_names(), name_pattern, min_score, result)
        else:
            logger.info("Begin to search tables via tag: %s", tag_value)
            _collect_by_tag(repository, repository.list_names(), tag_value or "", result)
    except TransportError as e:
        logger.error("Error listing DynamoDB tables: %s", e)
        result.error = e

    if not result.matches:
        logger.warning(
            "Empty search results - please check the search conditions, name: %s - tag: %s",
            name_pattern,
            tag_value,
        )

    for match in result.matches:
        logger.info("Table Name: %s, ARN: %s", match.name, match.identifier)

    return result


def _matches_name(name: str, pattern: str, min_score: int) -> bool:
    if pattern not in name:
        logger.debug(
            "Calculating: pattern: %s - table: %s - similarity: %d",
            pattern.lower(),
            name.lower(),
            score(pattern.lower(), name.lower()),
        )
    return is_fuzzy_match(pattern, name, min_score)


def _filter_names(names: Iterable[str], pattern: str, min_score: int) -> list[str]:
    """이름 조건만 적용 (ARN 확인 없이 이름만 추림)

    목록 조회가 도중에 실패하면 TransportError를 그대로 전파합니다.
    """
    return [name for name in names if _matches_name(name, pattern, min_score)]


def _collect_by_name(
    repository: TableRepository,
    names: Iterable[str],
    pattern: str,
    min_score: int,
    result: DiscoveryResult,
) -> None:
    for name in names:
        if not _matches_name(name, pattern, min_score):
            continue

        try:
            description = repository.describe(name)
        except TransportError as e:
            logger.warning("Error getting table ARN of %s: %s", name, e)
            continue

        logger.debug("Matched table by name: %s - %s", name, description.identity.identifier)
        result.matches.append(MatchResult(identity=description.identity))


def _collect_by_tag(
    repository: TableRepository,
    names: Iterable[str],
    tag_value: str,
    result: DiscoveryResult,
) -> None:
    for name in names:
        logger.info("Check the tags of table: %s", name)
        try:
            description = repository.describe(name)
        except TransportError as e:
            logger.warning("Error getting table ARN of %s: %s", name, e)
            continue

        identifier = description.identity.identifier
        try:
            tags = repository.list_tags(identifier)
        except TransportError as e:
            logger.warning("Get tags for arn: %s failed due to: %s", identifier, e)
            continue

        for tag in tags:
            logger.debug("table: %s - arn: %s, Key: %s, Value: %s", name, identifier, tag.key, tag.value)
            if tag.value == tag_value:
                result.matches.append(MatchResult(identity=description.identity))
                break
