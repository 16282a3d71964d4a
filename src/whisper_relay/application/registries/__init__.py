from .profile_registry import ProfileRegistry
from .group_directory import GroupDirectory

__all__ = ["ProfileRegistry", "GroupDirectory"]
