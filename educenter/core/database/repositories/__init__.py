"""
Data access layer.

- base: generic ``AsyncCrudRepository`` and ``QueryBuilder`` helpers
- users: accounts and device sessions
- resources: shared resources with author/category names
- edu_centers: centers with transactional link maintenance
- fillials: branches with transactional link maintenance
- links: link-table helpers and the pair lookup repository
- engagement: likes, comments and course registrations
"""

from .base import AsyncCrudRepository, QueryBuilder
from .edu_centers import EduCenterRepository
from .engagement import CommentRepository, CourseRegisterRepository, LikedRepository
from .fillials import FillialRepository
from .links import LinkRepository, linked_rows, replace_links
from .resources import ResourceRepository
from .users import DeviceSessionRepository, UserRepository

__all__ = [
    "AsyncCrudRepository",
    "CommentRepository",
    "CourseRegisterRepository",
    "DeviceSessionRepository",
    "EduCenterRepository",
    "FillialRepository",
    "LikedRepository",
    "LinkRepository",
    "QueryBuilder",
    "ResourceRepository",
    "UserRepository",
    "linked_rows",
    "replace_links",
]
