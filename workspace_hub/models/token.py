"""
Token 模型 - 保存用户当前的刷新令牌
"""

from django.db import models
from django.utils import timezone

from .base import TimestampedModel


class Token(TimestampedModel):
    """
    刷新令牌记录，与用户一对一

    访问令牌是无状态的JWT，这里只保存刷新令牌的 jti，
    用于刷新轮换和登出吊销。
    """

    user = models.OneToOneField(
        'User',
        on_delete=models.CASCADE,
        related_name='token',
        help_text="所属用户"
    )
    jti = models.CharField(
        max_length=64,
        unique=True,
        help_text="当前刷新令牌ID"
    )
    expires_at = models.DateTimeField(
        help_text="刷新令牌过期时间"
    )
    revoked_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="吊销时间"
    )

    class Meta:
        db_table = 'token'
        ordering = ['id']

    def __str__(self):
        return f"{self.user_id} - {self.jti}"

    @property
    def is_expired(self):
        """是否过期"""
        return timezone.now() >= self.expires_at

    @property
    def is_revoked(self):
        """是否已吊销"""
        return self.revoked_at is not None

    def matches(self, jti):
        """刷新令牌是否仍然有效"""
        return self.jti == jti and not self.is_revoked and not self.is_expired

    def revoke(self):
        """吊销刷新令牌"""
        if self.revoked_at is None:
            self.revoked_at = timezone.now()
            self.save(update_fields=['revoked_at', 'updated_at'])
