"""
Workspace Hub 自定义异常
"""

from typing import Optional

from .constants import ErrorCode


class WorkspaceHubError(Exception):
    """Workspace Hub 基础异常"""

    status_code = 500
    default_error_code = ErrorCode.INTERNAL_ERROR

    def __init__(self, message: str, error_code: Optional[str] = None):
        self.message = message
        self.error_code = error_code or self.default_error_code
        super().__init__(message)


class AuthenticationError(WorkspaceHubError):
    """认证错误基类"""
    status_code = 401
    default_error_code = ErrorCode.INVALID_CREDENTIALS


class InvalidCredentialsError(AuthenticationError):
    """无效凭据错误"""
    pass


class TokenMissingError(AuthenticationError):
    """缺少Token"""
    default_error_code = ErrorCode.TOKEN_MISSING


class TokenExpiredError(AuthenticationError):
    """Token过期错误"""
    default_error_code = ErrorCode.TOKEN_EXPIRED


class TokenInvalidError(AuthenticationError):
    """Token无效错误"""
    default_error_code = ErrorCode.TOKEN_INVALID


class UserInactiveError(AuthenticationError):
    """用户未激活错误"""
    default_error_code = ErrorCode.USER_INACTIVE


class PermissionDenied(WorkspaceHubError):
    """权限被拒绝错误"""
    status_code = 403
    default_error_code = ErrorCode.PERMISSION_DENIED


class NotFoundError(WorkspaceHubError):
    """资源不存在错误基类"""
    status_code = 404
    default_error_code = ErrorCode.NOT_FOUND


class WorkspaceNotFoundError(NotFoundError):
    """工作空间不存在错误"""
    default_error_code = ErrorCode.WORKSPACE_NOT_FOUND


class UserNotFoundError(NotFoundError):
    """用户不存在错误"""
    default_error_code = ErrorCode.USER_NOT_FOUND


class RoleNotFoundError(NotFoundError):
    """角色不存在错误"""
    default_error_code = ErrorCode.ROLE_NOT_FOUND


class ValidationError(WorkspaceHubError):
    """验证错误"""
    status_code = 400
    default_error_code = ErrorCode.VALIDATION_ERROR

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[dict] = None):
        super().__init__(message, error_code)
        self.details = details


class ConflictError(WorkspaceHubError):
    """资源冲突错误"""
    status_code = 409
    default_error_code = ErrorCode.CONFLICT


class EmailAlreadyExistsError(ConflictError):
    """邮箱已存在错误"""
    default_error_code = ErrorCode.EMAIL_ALREADY_EXISTS


class ConfigurationError(WorkspaceHubError):
    """配置错误"""
    default_error_code = ErrorCode.CONFIGURATION_ERROR
