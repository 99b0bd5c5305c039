"""
Workspace Hub 数据模型
"""

from .user import User
from .role import Role, UserRole
from .workspace import Workspace, WorkspaceMember
from .token import Token
from .audit import AuditLog

__all__ = [
    'User',
    'Role',
    'UserRole',
    'Workspace',
    'WorkspaceMember',
    'Token',
    'AuditLog'
]
