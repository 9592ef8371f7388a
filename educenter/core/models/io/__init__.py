"""
I/O models for API requests and responses.

These Pydantic schemas define the contract between the API endpoints and
clients. They are kept separate from the database entities so the HTTP
contract can evolve independently.

Modules:
- common: page envelope and small shared responses
- users: accounts, authentication and device sessions
- catalog: regions, categories, resources, subjects and fields
- edu_centers: education centers, their links and branches
- engagement: course registrations, comments and likes
"""

from .catalog import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    RegionCreate,
    RegionRead,
    RegionUpdate,
    ResourceCreate,
    ResourceRead,
    ResourceUpdate,
    SubjectRead,
)
from .common import MessageResponse, Page, UploadRead
from .edu_centers import (
    EduCenterCreate,
    EduCenterDetail,
    EduCenterRead,
    EduCenterUpdate,
    EduFanCreate,
    EduFanRead,
    EduSohaCreate,
    EduSohaRead,
    FillialCreate,
    FillialDetail,
    FillialRead,
    FillialUpdate,
)
from .engagement import (
    CommentCreate,
    CommentRead,
    CommentUpdate,
    CourseRegisterCreate,
    CourseRegisterRead,
    CourseRegisterUpdate,
    LikeCreate,
    LikeRead,
)
from .users import (
    AccessTokenResponse,
    ChangePasswordRequest,
    DeviceSessionRead,
    EmailRequest,
    LoginRequest,
    LoginResponse,
    UserRead,
    UserRegister,
    UserRegistered,
    UserUpdate,
    VerifyRequest,
)

__all__ = [
    "AccessTokenResponse",
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "ChangePasswordRequest",
    "CommentCreate",
    "CommentRead",
    "CommentUpdate",
    "CourseRegisterCreate",
    "CourseRegisterRead",
    "CourseRegisterUpdate",
    "DeviceSessionRead",
    "EduCenterCreate",
    "EduCenterDetail",
    "EduCenterRead",
    "EduCenterUpdate",
    "EduFanCreate",
    "EduFanRead",
    "EduSohaCreate",
    "EduSohaRead",
    "EmailRequest",
    "FillialCreate",
    "FillialDetail",
    "FillialRead",
    "FillialUpdate",
    "LikeCreate",
    "LikeRead",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "Page",
    "RegionCreate",
    "RegionRead",
    "RegionUpdate",
    "ResourceCreate",
    "ResourceRead",
    "ResourceUpdate",
    "SubjectRead",
    "UploadRead",
    "UserRead",
    "UserRegister",
    "UserRegistered",
    "UserUpdate",
    "VerifyRequest",
]
