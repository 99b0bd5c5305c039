"""
Workspace Hub 常量定义

角色名称在代码层面约束，数据库只保存角色记录
"""

from typing import List


# 固定角色
class UserRole:
    ADMIN = 'admin'
    MEMBER = 'member'


# 默认角色种子数据
DEFAULT_ROLES: List[str] = [
    UserRole.ADMIN,
    UserRole.MEMBER,
]

ROLE_DESCRIPTIONS = {
    UserRole.ADMIN: 'Administrator with access to every workspace',
    UserRole.MEMBER: 'Regular user',
}

# JWT Token 类型
TOKEN_TYPE_ACCESS = 'access'
TOKEN_TYPE_REFRESH = 'refresh'

# 默认设置
DEFAULT_PAGE_SIZE = 10
MAX_PAGE_SIZE = 100
DEFAULT_ACCESS_TOKEN_LIFETIME = 60 * 15  # 15分钟
DEFAULT_REFRESH_TOKEN_LIFETIME = 60 * 60 * 24 * 7  # 7天
MIN_JWT_SECRET_LENGTH = 32

WORKSPACE_NAME_MAX_LENGTH = 255

# 审计动作类型
AUDIT_ACTIONS = {
    'USER_REGISTERED': 'user_registered',
    'USER_LOGIN': 'user_login',
    'USER_LOGOUT': 'user_logout',
    'USER_STATUS_CHANGED': 'user_status_changed',
    'ROLE_ASSIGNED': 'role_assigned',
    'ROLE_REVOKED': 'role_revoked',
    'WORKSPACE_CREATED': 'workspace_created',
    'WORKSPACE_UPDATED': 'workspace_updated',
    'WORKSPACE_DELETED': 'workspace_deleted',
    'WORKSPACE_MEMBER_ADDED': 'workspace_member_added',
    'WORKSPACE_MEMBER_REMOVED': 'workspace_member_removed',
}


# 错误代码
class ErrorCode:
    # 认证错误
    INVALID_CREDENTIALS = 'invalid_credentials'
    TOKEN_MISSING = 'token_missing'
    TOKEN_EXPIRED = 'token_expired'
    TOKEN_INVALID = 'token_invalid'
    USER_INACTIVE = 'user_inactive'

    # 权限错误
    PERMISSION_DENIED = 'permission_denied'

    # 资源不存在
    NOT_FOUND = 'not_found'
    USER_NOT_FOUND = 'user_not_found'
    ROLE_NOT_FOUND = 'role_not_found'
    WORKSPACE_NOT_FOUND = 'workspace_not_found'

    # 验证错误
    VALIDATION_ERROR = 'validation_error'
    EMAIL_ALREADY_EXISTS = 'email_already_exists'
    CONFLICT = 'conflict'

    # 其他
    METHOD_NOT_ALLOWED = 'method_not_allowed'
    CONFIGURATION_ERROR = 'configuration_error'
    INTERNAL_ERROR = 'internal_error'
