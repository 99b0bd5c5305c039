"""
测试认证和用户 REST API
"""

from django.conf import settings
from django.test import override_settings
from rest_framework import status
from rest_framework.test import APITestCase

from ..models import User
from ..services import AuthService
from .factories import DEFAULT_PASSWORD, UserFactory


class AuthAPITest(APITestCase):
    """测试注册、登录、刷新、登出"""

    def test_register(self):
        response = self.client.post('/api/auth/register', {
            'email': 'new@example.com',
            'password': 'SecurePassword123!',
            'name': 'New User',
        })
        data = response.json()

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(data['user']['email'], 'new@example.com')
        self.assertEqual(data['user']['roles'], ['member'])
        self.assertNotIn('password', data['user'])
        self.assertEqual(data['tokens']['tokenType'], 'Bearer')

    def test_register_duplicate_email(self):
        UserFactory(email='taken@example.com')
        response = self.client.post('/api/auth/register', {
            'email': 'taken@example.com',
            'password': 'SecurePassword123!',
        })

        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT)
        self.assertEqual(response.json()['code'], 'email_already_exists')

    def test_register_invalid_email(self):
        response = self.client.post('/api/auth/register', {'email': 'nope', 'password': 'SecurePassword123!'})

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.json()['details'])

    def test_register_inactive(self):
        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'ACTIVATE_ON_REGISTRATION': False}):
            response = self.client.post('/api/auth/register', {
                'email': 'pending@example.com',
                'password': 'SecurePassword123!',
            })

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertFalse(response.json()['user']['isActive'])
        self.assertNotIn('tokens', response.json())

    def test_login(self):
        user = UserFactory(email='login@example.com')
        response = self.client.post('/api/auth/login', {'email': 'login@example.com', 'password': DEFAULT_PASSWORD})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['user']['id'], user.id)
        self.assertIn('accessToken', response.json()['tokens'])

    def test_login_wrong_password(self):
        UserFactory(email='login@example.com')
        response = self.client.post('/api/auth/login', {'email': 'login@example.com', 'password': 'wrong-password'})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()['code'], 'invalid_credentials')

    def test_login_inactive(self):
        UserFactory(email='inactive@example.com', is_active=False)
        response = self.client.post('/api/auth/login', {'email': 'inactive@example.com', 'password': DEFAULT_PASSWORD})

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()['code'], 'user_inactive')

    def test_refresh_and_logout(self):
        """刷新令牌轮换，登出后刷新令牌失效"""
        user = UserFactory()
        tokens = AuthService().generate_tokens(user)

        response = self.client.post('/api/auth/refresh', {'refreshToken': tokens['refreshToken']})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        new_tokens = response.json()['tokens']

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {new_tokens['accessToken']}")
        response = self.client.post('/api/auth/logout')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)

        response = self.client.post('/api/auth/refresh', {'refreshToken': new_tokens['refreshToken']})
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.json()['code'], 'token_invalid')

    def test_logout_requires_token(self):
        response = self.client.post('/api/auth/logout')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)


class UserAPITest(APITestCase):
    """测试用户接口"""

    def setUp(self):
        self.user = UserFactory(name="Plain", roles=['member'])
        self.admin = UserFactory(roles=['admin'])

    def login_as(self, user):
        token = AuthService().generate_tokens(user)['accessToken']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {token}')

    def test_get_profile(self):
        self.login_as(self.user)
        response = self.client.get('/api/users/me')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['email'], self.user.email)
        self.assertEqual(response.json()['roles'], ['member'])

    def test_update_profile(self):
        self.login_as(self.user)
        response = self.client.patch('/api/users/me', {'name': 'Renamed'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['name'], 'Renamed')

    def test_set_status_admin_only(self):
        self.login_as(self.user)
        response = self.client.patch(f'/api/users/{self.admin.id}/status', {'isActive': False})

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_deactivates_user(self):
        """停用后该用户的令牌被拒绝"""
        self.login_as(self.admin)
        response = self.client.patch(f'/api/users/{self.user.id}/status', {'isActive': False})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertFalse(User.objects.get(id=self.user.id).is_active)

        self.login_as(self.user)
        response = self.client.get('/api/users/me')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_assigns_and_revokes_role(self):
        self.login_as(self.admin)

        response = self.client.post(f'/api/users/{self.user.id}/roles', {'role': 'admin'})
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(sorted(response.json()['roles']), ['admin', 'member'])

        response = self.client.delete(f'/api/users/{self.user.id}/roles/admin')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.json()['roles'], ['member'])

    def test_assign_unknown_role(self):
        self.login_as(self.admin)
        response = self.client.post(f'/api/users/{self.user.id}/roles', {'role': 'superhero'})

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.json()['code'], 'role_not_found')

    def test_new_admin_can_list_all_workspaces(self):
        """角色在每次请求时重新读取"""
        self.login_as(self.user)
        self.assertEqual(self.client.get('/api/workspaces').status_code, status.HTTP_403_FORBIDDEN)

        User.objects.get(id=self.user.id).roles.add(*self.admin.roles.all())
        self.assertEqual(self.client.get('/api/workspaces').status_code, status.HTTP_200_OK)

    def test_list_roles(self):
        """登录用户可以查看角色列表"""
        self.login_as(self.user)
        response = self.client.get('/api/roles')
        roles = {role['name']: role for role in response.json()}

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertTrue({'admin', 'member'} <= set(roles))
        self.assertEqual(set(roles['admin']), {'id', 'name', 'description'})

    def test_list_roles_requires_token(self):
        response = self.client.get('/api/roles')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_missing_secret_key(self):
        """签名密钥缺失时返回500配置错误"""
        self.login_as(self.user)

        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'JWT_SECRET_KEY': ''}):
            response = self.client.get('/api/users/me')

        self.assertEqual(response.status_code, status.HTTP_500_INTERNAL_SERVER_ERROR)
        self.assertEqual(response.json()['code'], 'configuration_error')
        self.assertEqual(response.json()['error'], 'JWT secret key is not configured')
