"""
初始化 Workspace Hub
"""

from django.core.exceptions import ImproperlyConfigured
from django.core.management.base import BaseCommand, CommandError
from django.db import connection

from ...conf import workspace_settings
from ...services import RoleService


REQUIRED_TABLES = (
    'user',
    'role',
    'user_role',
    'workspace',
    'workspace_member',
    'token',
    'audit_log',
)


class Command(BaseCommand):
    help = 'Initialize Workspace Hub - 校验配置并写入默认角色'

    def add_arguments(self, parser):
        parser.add_argument(
            '--check-only',
            action='store_true',
            help='Only validate configuration, do not touch the database'
        )

    def handle(self, *args, **options):
        """执行初始化"""
        # 1. 检查基本配置
        self.stdout.write("🔍 Checking configuration...")
        try:
            workspace_settings.validate()
        except ImproperlyConfigured as e:
            raise CommandError(f"Configuration invalid: {str(e)}")
        self.stdout.write("✅ Configuration checked")

        if options['check_only']:
            self._show_config()
            return

        # 2. 检查数据表
        self.stdout.write("🔗 Checking database tables...")
        tables = set(connection.introspection.table_names())
        missing = set(REQUIRED_TABLES) - tables
        if missing:
            raise CommandError(
                f"Missing tables: {', '.join(sorted(missing))}. Run 'python manage.py migrate workspace_hub' first"
            )
        self.stdout.write("✅ Database tables present")

        # 3. 写入默认角色
        self.stdout.write("🏗️  Seeding default roles...")
        roles = RoleService().ensure_default_roles()
        self.stdout.write(f"✅ Roles available: {', '.join(role.name for role in roles)}")

        self.stdout.write(
            self.style.SUCCESS('\n🎉 Workspace Hub initialized successfully!')
        )
        self.stdout.write("💡 Run 'python manage.py create_workspace_admin' to create an administrator")

    def _show_config(self):
        """显示关键配置"""
        self.stdout.write(f"   JWT algorithm: {workspace_settings.JWT_ALGORITHM}")
        self.stdout.write(f"   Access token lifetime: {workspace_settings.JWT_ACCESS_TOKEN_LIFETIME}s")
        self.stdout.write(f"   Refresh token lifetime: {workspace_settings.JWT_REFRESH_TOKEN_LIFETIME}s")
        self.stdout.write(f"   Page size: {workspace_settings.DEFAULT_PAGE_SIZE} (max {workspace_settings.MAX_PAGE_SIZE})")
        self.stdout.write(f"   Admin role: {workspace_settings.ADMIN_ROLE}")
