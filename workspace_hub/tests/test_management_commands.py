"""
测试管理命令
"""

from io import StringIO
from unittest import mock

from django.conf import settings
from django.core.management import call_command
from django.core.management.base import CommandError
from django.db import connection
from django.test import TestCase, override_settings

from ..models import Role, User
from .factories import UserFactory


class InitWorkspaceHubCommandTest(TestCase):

    def test_init(self):
        Role.objects.filter(name='member').delete()
        out = StringIO()

        call_command('init_workspace_hub', stdout=out)

        self.assertIn('initialized successfully', out.getvalue())
        self.assertTrue(Role.objects.filter(name='member').exists())

    def test_check_only(self):
        out = StringIO()
        call_command('init_workspace_hub', '--check-only', stdout=out)

        self.assertIn('JWT algorithm: HS256', out.getvalue())
        self.assertNotIn('initialized successfully', out.getvalue())

    def test_missing_tables(self):
        """缺少令牌表和审计日志表时拒绝初始化"""
        tables = ['user', 'role', 'user_role', 'workspace', 'workspace_member']

        with mock.patch.object(connection.introspection, 'table_names', return_value=tables):
            with self.assertRaises(CommandError) as cm:
                call_command('init_workspace_hub', stdout=StringIO())

        self.assertIn('Missing tables: audit_log, token', str(cm.exception))

    def test_invalid_configuration(self):
        with override_settings(WORKSPACE_HUB={**settings.WORKSPACE_HUB, 'JWT_SECRET_KEY': 'short'}):
            with self.assertRaises(CommandError):
                call_command('init_workspace_hub', stdout=StringIO())


class CreateWorkspaceAdminCommandTest(TestCase):

    def test_create_admin(self):
        out = StringIO()
        call_command(
            'create_workspace_admin',
            '--email', 'Root@Example.com',
            '--password', 'SecurePassword123!',
            '--name', 'Root',
            stdout=out
        )

        admin = User.objects.get(email='root@example.com')
        self.assertTrue(admin.is_active)
        self.assertEqual(admin.role_names, {'admin'})
        self.assertTrue(admin.check_password('SecurePassword123!'))
        self.assertIn('Administrator created successfully', out.getvalue())

    def test_duplicate_email(self):
        UserFactory(email='root@example.com')

        with self.assertRaises(CommandError):
            call_command(
                'create_workspace_admin',
                '--email', 'root@example.com',
                '--password', 'SecurePassword123!',
                stdout=StringIO()
            )

    def test_short_password(self):
        with self.assertRaises(CommandError):
            call_command(
                'create_workspace_admin',
                '--email', 'root@example.com',
                '--password', 'short',
                stdout=StringIO()
            )

    def test_invalid_email(self):
        with self.assertRaises(CommandError):
            call_command(
                'create_workspace_admin',
                '--email', 'not-an-email',
                '--password', 'SecurePassword123!',
                stdout=StringIO()
            )
