from .enums import ADMIN_ROLES, SELF_REGISTRATION_ROLES, SortOrder, UserRole, UserStatus

__all__ = ["ADMIN_ROLES", "SELF_REGISTRATION_ROLES", "SortOrder", "UserRole", "UserStatus"]
