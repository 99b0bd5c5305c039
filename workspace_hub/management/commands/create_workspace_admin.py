"""
创建 Workspace Hub 管理员
"""

from getpass import getpass

from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError
from django.core.validators import validate_email

from ...conf import workspace_settings
from ...models import User
from ...services import RoleService


class Command(BaseCommand):
    help = 'Create an active Workspace Hub user with the admin role'

    def add_arguments(self, parser):
        parser.add_argument(
            '--email',
            type=str,
            help='Email address for the administrator'
        )
        parser.add_argument(
            '--password',
            type=str,
            help='Password for the administrator'
        )
        parser.add_argument(
            '--name',
            type=str,
            help='Display name for the administrator'
        )

    def handle(self, *args, **options):
        """执行创建"""
        email = options.get('email')
        password = options.get('password')
        name = options.get('name')

        # 交互式输入
        if not email:
            email = input('Email: ').strip()

        if not password:
            password = getpass('Password: ')
            confirm_password = getpass('Confirm password: ')
            if password != confirm_password:
                raise CommandError("Passwords do not match")

        if name is None and not options.get('email'):
            name = input('Display name (optional): ').strip()

        if not email:
            raise CommandError("Email is required")

        if not password:
            raise CommandError("Password is required")

        min_length = workspace_settings.PASSWORD_MIN_LENGTH
        if len(password) < min_length:
            raise CommandError(f"Password must be at least {min_length} characters long")

        # 验证邮箱格式
        try:
            validate_email(email)
        except ValidationError:
            raise CommandError("Invalid email format")

        if User.objects.filter(email=email.strip().lower()).exists():
            raise CommandError(f'User with email "{email}" already exists')

        self.stdout.write(f"🚀 Creating administrator: {email}")

        RoleService().ensure_default_roles()
        user = User.objects.create_superuser(email=email, password=password, name=name or '')

        self.stdout.write(self.style.SUCCESS('✅ Administrator created successfully!'))
        self.stdout.write(f"   ID: {user.id}")
        self.stdout.write(f"   Email: {user.email}")
        if user.name:
            self.stdout.write(f"   Name: {user.name}")
        self.stdout.write(f"   Roles: {', '.join(sorted(user.role_names))}")
