"""
Repository layer.

    from member_registry.repositories import MemberRepository, MemberStore
"""

from .base_repository import BaseRepository
from .interfaces import MemberStore
from .member_repository import MemberRepository

__all__ = [
    "BaseRepository",
    "MemberStore",
    "MemberRepository",
]
