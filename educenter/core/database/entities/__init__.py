"""
Database entity models.

Modules:
- regions: Regions
- categories: Resource categories
- users: User accounts
- device_sessions: Devices a user has logged in from
- resources: Shared learning resources
- subjects: Subjects (fan) and fields (soha)
- edu_centers: Education centers and their subject/field links
- fillials: Branches and their subject/field links
- engagement: Course registrations, comments and likes
"""

from .categories import Category
from .device_sessions import DeviceSession
from .edu_centers import EduCenter, EduFan, EduSoha
from .engagement import Comment, CourseRegister, Liked
from .fillials import Fillial, FillialFan, FillialSoha
from .regions import Region
from .resources import Resource
from .subjects import Fan, Soha
from .users import User

__all__ = [
    "Category",
    "Comment",
    "CourseRegister",
    "DeviceSession",
    "EduCenter",
    "EduFan",
    "EduSoha",
    "Fan",
    "Fillial",
    "FillialFan",
    "FillialSoha",
    "Liked",
    "Region",
    "Resource",
    "Soha",
    "User",
]
