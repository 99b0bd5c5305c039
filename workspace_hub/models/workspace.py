"""
工作空间相关模型
"""

from django.db import models

from .base import TimestampedModel
from ..constants import WORKSPACE_NAME_MAX_LENGTH


class Workspace(TimestampedModel):
    """工作空间模型"""

    name = models.CharField(
        max_length=WORKSPACE_NAME_MAX_LENGTH,
        help_text="工作空间名称"
    )
    created_by = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='created_workspaces',
        help_text="工作空间创建者 (所有者)"
    )
    members = models.ManyToManyField(
        'User',
        through='WorkspaceMember',
        related_name='workspaces',
        blank=True,
        help_text="工作空间成员 (不包含创建者)"
    )

    class Meta:
        db_table = 'workspace'
        ordering = ['id']

    def __str__(self):
        return self.name

    def is_owned_by(self, user_id):
        """是否是创建者"""
        return self.created_by_id == user_id

    def has_member(self, user_id):
        """是否是显式成员"""
        return WorkspaceMember.objects.filter(workspace=self, user_id=user_id).exists()

    def is_accessible_by(self, user_id):
        """创建者或成员均可访问"""
        return self.is_owned_by(user_id) or self.has_member(user_id)

    def get_member_count(self):
        """获取工作空间成员数量"""
        return self.memberships.count()


class WorkspaceMember(models.Model):
    """工作空间成员关联表 (workspace_member)"""

    workspace = models.ForeignKey(
        Workspace,
        on_delete=models.CASCADE,
        related_name='memberships',
        help_text="工作空间"
    )
    user = models.ForeignKey(
        'User',
        on_delete=models.CASCADE,
        related_name='memberships',
        help_text="成员用户"
    )
    joined_at = models.DateTimeField(
        auto_now_add=True,
        help_text="加入时间"
    )

    class Meta:
        db_table = 'workspace_member'
        constraints = [
            models.UniqueConstraint(fields=['workspace', 'user'], name='uniq_workspace_member'),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.workspace_id}"
