"""
core/aws - AWS 세션/클라이언트 생성
"""

from .client import create_session, get_client

__all__ = ["create_session", "get_client"]
