"""
角色相关模型
"""

from django.db import models

from .base import TimestampedModel


class Role(TimestampedModel):
    """角色模型 - 静态参考数据"""

    name = models.CharField(
        max_length=50,
        unique=True,
        help_text="角色名称，例如 admin / member"
    )
    description = models.CharField(
        max_length=255,
        blank=True,
        default='',
        help_text="角色描述"
    )

    class Meta:
        db_table = 'role'
        ordering = ['id']

    def __str__(self):
        return self.name


class UserRole(models.Model):
    """用户角色关联表 (user_role)"""

    user = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='role_links',
        help_text="用户"
    )
    role = models.ForeignKey(
        Role,
        on_delete=models.CASCADE,
        related_name='user_links',
        help_text="角色"
    )
    created_at = models.DateTimeField(
        auto_now_add=True
    )

    class Meta:
        db_table = 'user_role'
        constraints = [
            models.UniqueConstraint(fields=['user', 'role'], name='uniq_user_role'),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.role_id}"
