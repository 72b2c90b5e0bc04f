"""
core/dynamodb/similarity.py - 테이블 이름 유사도

편집 거리(Levenshtein, 삽입/삭제/치환 비용 1) 기반 정규화 유사도를 계산합니다.
문자열은 유니코드 코드 포인트 단위로 비교하며 대소문자는 호출자가 정합니다.
"""

from rapidfuzz.distance import Levenshtein

from core.config import settings

# Fuzzy 검색 상수
FUZZY_MIN_SCORE = settings.FUZZY_MIN_SCORE  # 최소 유사도 (%)


def normalize_ratio(ratio: int) -> int:
    """유사도를 [0, 100] 범위로 보정"""
    if ratio < 0:
        return 0
    if ratio > 100:
        return 100
    return ratio


def score(a: str, b: str) -> int:
    """두 문자열의 유사도 (0~100)

    floor((maxLen - distance) * 100 / maxLen). 두 문자열이 모두 비어 있으면 100.

    Args:
        a: 비교 문자열
        b: 비교 문자열

    Returns:
        정수 유사도

    Example:
        >>> score("orders", "order")
        83
    """
    max_len = max(len(a), len(b))
    if max_len == 0:
        return 100

    distance = Levenshtein.distance(a, b)
    return normalize_ratio(((max_len - distance) * 100) // max_len)


def is_fuzzy_match(pattern: str, name: str, min_score: int = FUZZY_MIN_SCORE) -> bool:
    """테이블 이름이 검색어와 매칭되는지 확인

    검색어가 이름에 그대로 포함되면(대소문자 구분) 즉시 매칭,
    아니면 소문자 유사도가 min_score 이상이어야 합니다.
    """
    if pattern in name:
        return True
    return score(pattern.lower(), name.lower()) >= min_score
