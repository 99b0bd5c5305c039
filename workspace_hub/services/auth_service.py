"""
认证服务
"""

import uuid
import logging
from datetime import timedelta
from typing import Any, Dict, Optional

import jwt
from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.validators import validate_email
from django.db import transaction
from django.utils import timezone

from ..conf import is_feature_enabled, workspace_settings
from ..constants import (
    TOKEN_TYPE_ACCESS,
    TOKEN_TYPE_REFRESH,
    AUDIT_ACTIONS
)
from ..exceptions import (
    ConfigurationError,
    EmailAlreadyExistsError,
    InvalidCredentialsError,
    PermissionDenied,
    TokenExpiredError,
    TokenInvalidError,
    UserInactiveError,
    ValidationError
)
from ..models import AuditLog, Role, Token, User


logger = logging.getLogger(__name__)


class AuthService:
    """认证服务"""

    def __init__(self):
        self.secret_key = workspace_settings.JWT_SECRET_KEY
        self.algorithm = workspace_settings.JWT_ALGORITHM
        self.access_token_lifetime = workspace_settings.JWT_ACCESS_TOKEN_LIFETIME
        self.refresh_token_lifetime = workspace_settings.JWT_REFRESH_TOKEN_LIFETIME

    def generate_tokens(self, user: User) -> Dict[str, Any]:
        """
        生成访问令牌和刷新令牌

        刷新令牌的 jti 保存在用户的 Token 记录中，旧的刷新令牌随之失效。

        Args:
            user: 用户对象

        Returns:
            Dict[str, Any]: 包含accessToken和refreshToken的字典
        """
        now = timezone.now()
        refresh_expires_at = now + timedelta(seconds=self.refresh_token_lifetime)
        refresh_jti = uuid.uuid4().hex

        access_token_payload = {
            'user_id': user.id,
            'token_type': TOKEN_TYPE_ACCESS,
            'jti': uuid.uuid4().hex,
            'iat': int(now.timestamp()),
            'exp': int((now + timedelta(seconds=self.access_token_lifetime)).timestamp()),
        }

        refresh_token_payload = {
            'user_id': user.id,
            'token_type': TOKEN_TYPE_REFRESH,
            'jti': refresh_jti,
            'iat': int(now.timestamp()),
            'exp': int(refresh_expires_at.timestamp()),
        }

        signing_key = self._signing_key()
        access_token = jwt.encode(access_token_payload, signing_key, algorithm=self.algorithm)
        refresh_token = jwt.encode(refresh_token_payload, signing_key, algorithm=self.algorithm)

        Token.objects.update_or_create(
            user=user,
            defaults={
                'jti': refresh_jti,
                'expires_at': refresh_expires_at,
                'revoked_at': None,
            }
        )

        return {
            'accessToken': access_token,
            'refreshToken': refresh_token,
            'tokenType': 'Bearer',
            'expiresIn': self.access_token_lifetime,
        }

    def verify_token(self, token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
        """
        验证JWT令牌

        Args:
            token: JWT令牌
            expected_type: 期望的令牌类型 (access / refresh)

        Returns:
            Dict[str, Any]: 解码后的payload

        Raises:
            TokenExpiredError: 令牌过期
            TokenInvalidError: 令牌无效或缺少 exp / iat
        """
        try:
            payload = jwt.decode(
                token,
                self._signing_key(),
                algorithms=[self.algorithm],
                options={'require': ['exp', 'iat']}
            )
        except jwt.ExpiredSignatureError:
            raise TokenExpiredError("Token has expired")
        except jwt.InvalidTokenError:
            raise TokenInvalidError("Invalid token")

        if expected_type and payload.get('token_type') != expected_type:
            raise TokenInvalidError("Invalid token type")

        if not isinstance(payload.get('user_id'), int):
            raise TokenInvalidError("Token has no user")

        return payload

    def get_user_id_from_access_token(self, token: str) -> int:
        """从访问令牌解析用户ID (无状态，不查询数据库)"""
        payload = self.verify_token(token, expected_type=TOKEN_TYPE_ACCESS)
        return payload['user_id']

    def register_user(
        self,
        email: str,
        password: str,
        name: str = '',
        ip_address: str = None,
        user_agent: str = None
    ) -> Dict[str, Any]:
        """
        用户注册

        Args:
            email: 邮箱
            password: 密码
            name: 显示名称
            ip_address: IP地址
            user_agent: User Agent

        Returns:
            Dict[str, Any]: 注册结果，用户激活时包含tokens

        Raises:
            EmailAlreadyExistsError: 邮箱已存在
            ValidationError: 参数无效
        """
        if not is_feature_enabled('registration'):
            raise PermissionDenied("Registration is disabled")

        email = (email or '').strip().lower()
        self._validate_registration(email, password)

        # 检查邮箱是否已存在
        if User.objects.filter(email=email).exists():
            raise EmailAlreadyExistsError("Email already exists")

        with transaction.atomic():
            user = User.objects.create_user(
                email=email,
                password=password,
                name=(name or '').strip(),
                is_active=workspace_settings.ACTIVATE_ON_REGISTRATION
            )

            default_role = workspace_settings.DEFAULT_USER_ROLE
            if default_role:
                role, _ = Role.objects.get_or_create(name=default_role)
                user.roles.add(role)

            AuditLog.log_action(
                AUDIT_ACTIONS['USER_REGISTERED'],
                user=user,
                resource_type='user',
                resource_id=user.id,
                ip_address=ip_address,
                user_agent=user_agent
            )

        logger.info(f"User registered: {user.id} ({user.email}), active={user.is_active}")

        result = {'user': user}
        if user.is_active:
            result['tokens'] = self.generate_tokens(user)
        return result

    def authenticate_user(self, email: str, password: str, ip_address: str = None, user_agent: str = None) -> Dict[str, Any]:
        """
        用户认证

        Args:
            email: 邮箱
            password: 密码
            ip_address: IP地址
            user_agent: User Agent

        Returns:
            Dict[str, Any]: 用户和tokens

        Raises:
            InvalidCredentialsError: 邮箱或密码错误
            UserInactiveError: 用户未激活
        """
        try:
            user = User.objects.get(email=(email or '').strip().lower())
        except User.DoesNotExist:
            # 记录失败的登录尝试
            AuditLog.log_action(
                AUDIT_ACTIONS['USER_LOGIN'],
                resource_type='user',
                metadata={'email': email, 'success': False, 'reason': 'user_not_found'},
                ip_address=ip_address,
                user_agent=user_agent
            )
            raise InvalidCredentialsError("Invalid credentials")

        # 验证密码
        if not user.check_password(password):
            AuditLog.log_action(
                AUDIT_ACTIONS['USER_LOGIN'],
                user=user,
                resource_type='user',
                resource_id=user.id,
                metadata={'success': False, 'reason': 'invalid_password'},
                ip_address=ip_address,
                user_agent=user_agent
            )
            raise InvalidCredentialsError("Invalid credentials")

        # 检查用户是否激活
        if not user.is_active:
            raise UserInactiveError("User account is inactive")

        user.last_login = timezone.now()
        user.save(update_fields=['last_login'])

        AuditLog.log_action(
            AUDIT_ACTIONS['USER_LOGIN'],
            user=user,
            resource_type='user',
            resource_id=user.id,
            metadata={'success': True},
            ip_address=ip_address,
            user_agent=user_agent
        )

        logger.info(f"User logged in: {user.id}")
        return {
            'user': user,
            'tokens': self.generate_tokens(user),
        }

    def refresh_access_token(self, refresh_token: str) -> Dict[str, Any]:
        """
        刷新访问令牌 (同时轮换刷新令牌)

        Args:
            refresh_token: 刷新令牌

        Returns:
            Dict[str, Any]: 新的tokens

        Raises:
            TokenExpiredError: 刷新令牌过期
            TokenInvalidError: 刷新令牌无效或已被吊销
        """
        payload = self.verify_token(refresh_token, expected_type=TOKEN_TYPE_REFRESH)

        try:
            user = User.objects.select_related('token').get(id=payload['user_id'])
        except User.DoesNotExist:
            raise TokenInvalidError("User not found")

        try:
            stored = user.token
        except Token.DoesNotExist:
            raise TokenInvalidError("Refresh token has been revoked")

        if not stored.matches(payload.get('jti')):
            raise TokenInvalidError("Refresh token has been revoked")

        if not user.is_active:
            raise UserInactiveError("User account is inactive")

        return self.generate_tokens(user)

    def logout_user(self, user_id: int, ip_address: str = None, user_agent: str = None) -> bool:
        """
        用户登出，吊销当前刷新令牌

        Args:
            user_id: 用户ID
            ip_address: IP地址
            user_agent: User Agent

        Returns:
            bool: 是否吊销了刷新令牌
        """
        token = Token.objects.filter(user_id=user_id).first()
        revoked = False
        if token is not None and not token.is_revoked:
            token.revoke()
            revoked = True

        AuditLog.log_action(
            AUDIT_ACTIONS['USER_LOGOUT'],
            user_id=user_id,
            resource_type='user',
            resource_id=user_id,
            ip_address=ip_address,
            user_agent=user_agent
        )

        logger.info(f"User logged out: {user_id}, revoked={revoked}")
        return revoked

    def _signing_key(self) -> str:
        if not self.secret_key:
            raise ConfigurationError("JWT secret key is not configured")
        return self.secret_key

    def _validate_registration(self, email: str, password: str):
        """验证注册参数"""
        try:
            validate_email(email)
        except DjangoValidationError:
            raise ValidationError("Invalid email format", details={'email': ['Enter a valid email address.']})

        min_length = workspace_settings.PASSWORD_MIN_LENGTH
        if not password or len(password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters long",
                details={'password': [f'Ensure this field has at least {min_length} characters.']}
            )
