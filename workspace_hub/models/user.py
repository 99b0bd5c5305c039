"""
用户模型
"""

from django.contrib.auth.base_user import AbstractBaseUser, BaseUserManager
from django.db import models

from .base import TimestampedModel


class UserManager(BaseUserManager):
    """自定义用户管理器"""

    def create_user(self, email, password=None, **extra_fields):
        """创建普通用户"""
        if not email:
            raise ValueError('Email is required')

        user = self.model(
            email=email.strip().lower(),
            **extra_fields
        )
        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        """创建管理员用户 (激活 + admin 角色)"""
        from ..conf import workspace_settings
        from .role import Role

        extra_fields.setdefault('is_active', True)
        user = self.create_user(email, password, **extra_fields)

        admin_role, _ = Role.objects.get_or_create(name=workspace_settings.ADMIN_ROLE)
        user.roles.add(admin_role)
        return user


class User(TimestampedModel, AbstractBaseUser):
    """用户模型"""

    name = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="显示名称"
    )
    email = models.EmailField(
        max_length=255,
        unique=True
    )
    is_active = models.BooleanField(
        default=False,
        db_index=True,
        help_text="是否激活"
    )
    roles = models.ManyToManyField(
        'Role',
        through='UserRole',
        related_name='users',
        blank=True
    )

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'user'
        ordering = ['id']

    def __str__(self):
        return self.email

    @property
    def display_name(self):
        """显示名称"""
        return self.name or self.email

    @property
    def role_names(self):
        """角色名称集合"""
        return {role.name for role in self.roles.all()}

    def has_role(self, role_name):
        """是否拥有指定角色"""
        return role_name in self.role_names
