"""
Centralized access to the database models.

    from member_registry.models import Member
"""

from .member import Member

__all__ = [
    "Member",
]
