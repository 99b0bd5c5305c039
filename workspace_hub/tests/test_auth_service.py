"""
测试认证服务
"""

import time

import jwt
from django.conf import settings
from django.test import TestCase, override_settings

from ..constants import TOKEN_TYPE_ACCESS
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
from ..models import AuditLog, Token, User
from ..services import AuthService
from .factories import DEFAULT_PASSWORD, UserFactory


class AuthServiceRegistrationTest(TestCase):
    """测试注册"""

    def setUp(self):
        self.auth_service = AuthService()
        self.test_email = "test@example.com"
        self.test_password = "SecurePassword123!"

    def test_register_user_success(self):
        """测试用户注册成功"""
        result = self.auth_service.register_user(
            email=self.test_email,
            password=self.test_password,
            name="Test User"
        )

        user = result['user']
        self.assertEqual(user.email, self.test_email)
        self.assertTrue(user.is_active)
        self.assertTrue(user.check_password(self.test_password))
        self.assertEqual(user.role_names, {'member'})
        self.assertIn('accessToken', result['tokens'])
        self.assertIn('refreshToken', result['tokens'])

        # 验证审计日志
        self.assertTrue(AuditLog.objects.filter(user=user, action='user_registered').exists())

    def test_register_normalizes_email(self):
        result = self.auth_service.register_user(email="  Mixed@Example.COM ", password=self.test_password)
        self.assertEqual(result['user'].email, "mixed@example.com")

    def test_register_user_duplicate_email(self):
        """测试重复邮箱注册"""
        self.auth_service.register_user(email=self.test_email, password=self.test_password)

        with self.assertRaises(EmailAlreadyExistsError):
            self.auth_service.register_user(email=self.test_email.upper(), password=self.test_password)

    def test_register_user_invalid_email(self):
        with self.assertRaises(ValidationError):
            self.auth_service.register_user(email="invalid-email", password=self.test_password)

    def test_register_user_weak_password(self):
        """测试弱密码"""
        with self.assertRaises(ValidationError):
            self.auth_service.register_user(email=self.test_email, password="123")

    def test_register_inactive_without_tokens(self):
        """注册后不自动激活时不签发令牌"""
        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'ACTIVATE_ON_REGISTRATION': False}):
            result = self.auth_service.register_user(email=self.test_email, password=self.test_password)

        self.assertFalse(result['user'].is_active)
        self.assertNotIn('tokens', result)

    def test_register_disabled(self):
        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'ENABLE_REGISTRATION': False}):
            with self.assertRaises(PermissionDenied):
                self.auth_service.register_user(email=self.test_email, password=self.test_password)

        self.assertFalse(User.objects.filter(email=self.test_email).exists())


class AuthServiceLoginTest(TestCase):
    """测试登录、刷新、登出"""

    def setUp(self):
        self.auth_service = AuthService()
        self.user = UserFactory(email="login@example.com")

    def test_authenticate_user_success(self):
        result = self.auth_service.authenticate_user("login@example.com", DEFAULT_PASSWORD)

        self.assertEqual(result['user'], self.user)
        self.assertEqual(result['tokens']['tokenType'], 'Bearer')

        self.user.refresh_from_db()
        self.assertIsNotNone(self.user.last_login)
        self.assertTrue(AuditLog.objects.filter(user=self.user, action='user_login').exists())

    def test_authenticate_user_wrong_password(self):
        with self.assertRaises(InvalidCredentialsError):
            self.auth_service.authenticate_user("login@example.com", "wrongpassword")

    def test_authenticate_user_not_exists(self):
        with self.assertRaises(InvalidCredentialsError):
            self.auth_service.authenticate_user("nonexistent@example.com", DEFAULT_PASSWORD)

    def test_authenticate_user_inactive(self):
        """测试非活跃用户"""
        UserFactory(email="inactive@example.com", is_active=False)

        with self.assertRaises(UserInactiveError):
            self.auth_service.authenticate_user("inactive@example.com", DEFAULT_PASSWORD)

    def test_access_token_resolves_user(self):
        tokens = self.auth_service.generate_tokens(self.user)
        self.assertEqual(self.auth_service.get_user_id_from_access_token(tokens['accessToken']), self.user.id)

    def test_refresh_token_not_accepted_as_access(self):
        tokens = self.auth_service.generate_tokens(self.user)

        with self.assertRaises(TokenInvalidError):
            self.auth_service.get_user_id_from_access_token(tokens['refreshToken'])

    def test_expired_token(self):
        """过期令牌"""
        now = int(time.time())
        token = jwt.encode(
            {'user_id': self.user.id, 'token_type': TOKEN_TYPE_ACCESS, 'iat': now - 120, 'exp': now - 60},
            self.auth_service.secret_key,
            algorithm=self.auth_service.algorithm
        )

        with self.assertRaises(TokenExpiredError):
            self.auth_service.get_user_id_from_access_token(token)

    def test_token_signed_with_other_key(self):
        token = jwt.encode(
            {'user_id': self.user.id, 'token_type': TOKEN_TYPE_ACCESS},
            'another-secret-key-that-is-long-enough-to-sign',
            algorithm='HS256'
        )

        with self.assertRaises(TokenInvalidError):
            self.auth_service.verify_token(token)

    def test_token_without_user(self):
        now = int(time.time())
        token = jwt.encode(
            {'user_id': 'abc', 'token_type': TOKEN_TYPE_ACCESS, 'iat': now, 'exp': now + 60},
            self.auth_service.secret_key,
            algorithm=self.auth_service.algorithm
        )

        with self.assertRaises(TokenInvalidError):
            self.auth_service.verify_token(token)

    def test_token_without_expiry(self):
        """没有 exp 的令牌不能永久有效"""
        token = jwt.encode(
            {'user_id': self.user.id, 'token_type': TOKEN_TYPE_ACCESS, 'iat': int(time.time())},
            self.auth_service.secret_key,
            algorithm=self.auth_service.algorithm
        )

        with self.assertRaises(TokenInvalidError):
            self.auth_service.get_user_id_from_access_token(token)

    def test_token_without_issued_at(self):
        token = jwt.encode(
            {'user_id': self.user.id, 'token_type': TOKEN_TYPE_ACCESS, 'exp': int(time.time()) + 60},
            self.auth_service.secret_key,
            algorithm=self.auth_service.algorithm
        )

        with self.assertRaises(TokenInvalidError):
            self.auth_service.verify_token(token)

    def test_missing_secret_key(self):
        """未配置签名密钥时拒绝签发和验证"""
        tokens = self.auth_service.generate_tokens(self.user)

        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'JWT_SECRET_KEY': ''}):
            service = AuthService()
            with self.assertRaises(ConfigurationError):
                service.generate_tokens(self.user)
            with self.assertRaises(ConfigurationError):
                service.verify_token(tokens['accessToken'])

    def test_garbage_token(self):
        with self.assertRaises(TokenInvalidError):
            self.auth_service.verify_token("not-a-jwt")

    def test_refresh_rotates_token(self):
        """刷新后旧的刷新令牌失效"""
        tokens = self.auth_service.generate_tokens(self.user)
        new_tokens = self.auth_service.refresh_access_token(tokens['refreshToken'])

        self.assertNotEqual(new_tokens['refreshToken'], tokens['refreshToken'])
        with self.assertRaises(TokenInvalidError):
            self.auth_service.refresh_access_token(tokens['refreshToken'])

        # 新令牌仍可使用
        self.auth_service.refresh_access_token(new_tokens['refreshToken'])

    def test_refresh_with_access_token_rejected(self):
        tokens = self.auth_service.generate_tokens(self.user)

        with self.assertRaises(TokenInvalidError):
            self.auth_service.refresh_access_token(tokens['accessToken'])

    def test_refresh_inactive_user(self):
        tokens = self.auth_service.generate_tokens(self.user)
        User.objects.filter(id=self.user.id).update(is_active=False)

        with self.assertRaises(UserInactiveError):
            self.auth_service.refresh_access_token(tokens['refreshToken'])

    def test_logout_revokes_refresh_token(self):
        tokens = self.auth_service.generate_tokens(self.user)

        self.assertTrue(self.auth_service.logout_user(self.user.id))
        self.assertTrue(Token.objects.get(user=self.user).is_revoked)

        with self.assertRaises(TokenInvalidError):
            self.auth_service.refresh_access_token(tokens['refreshToken'])

    def test_logout_without_token(self):
        self.assertFalse(self.auth_service.logout_user(self.user.id))
