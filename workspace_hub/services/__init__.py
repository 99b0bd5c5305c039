"""
Workspace Hub 业务逻辑服务
"""

from .auth_service import AuthService
from .role_service import RoleService
from .user_service import UserService
from .workspace_service import WorkspaceService

__all__ = [
    'AuthService',
    'RoleService',
    'UserService',
    'WorkspaceService'
]
