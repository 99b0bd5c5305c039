"""
Bearer 令牌认证
"""

from typing import Optional

from .exceptions import TokenInvalidError, TokenMissingError, UserInactiveError
from .models import User
from .services import AuthService


BEARER_KEYWORD = 'bearer'


def get_bearer_token(request) -> Optional[str]:
    """从 Authorization 头获取令牌，格式不正确时返回 None"""
    header = request.META.get('HTTP_AUTHORIZATION', '')
    parts = header.split()

    if len(parts) != 2 or parts[0].lower() != BEARER_KEYWORD:
        return None
    return parts[1]


def authenticate_request(request) -> User:
    """
    解析请求中的访问令牌并返回用户

    Raises:
        TokenMissingError: 缺少令牌或格式错误
        TokenExpiredError: 令牌过期
        TokenInvalidError: 令牌无效或用户不存在
        UserInactiveError: 用户未激活
    """
    token = get_bearer_token(request)
    if not token:
        raise TokenMissingError("Authentication credentials were not provided")

    user_id = AuthService().get_user_id_from_access_token(token)

    try:
        user = User.objects.prefetch_related('roles').get(id=user_id)
    except User.DoesNotExist:
        raise TokenInvalidError("User not found")

    if not user.is_active:
        raise UserInactiveError("User account is inactive")

    return user
