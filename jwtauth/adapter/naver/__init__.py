"""Naver userinfo adapter."""

from .userinfo import (
    MockNaverUserInfoClient,
    NaverUserInfoClient,
    NaverUserInfoError,
    RealNaverUserInfoClient,
)

__all__ = [
    "MockNaverUserInfoClient",
    "NaverUserInfoClient",
    "NaverUserInfoError",
    "RealNaverUserInfoClient",
]
