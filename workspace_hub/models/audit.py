"""
审计日志模型
"""

from django.db import models


class AuditLog(models.Model):
    """审计日志模型"""

    user = models.ForeignKey(
        'User',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='audit_logs',
        help_text="操作用户"
    )
    action = models.CharField(
        max_length=100,
        db_index=True,
        help_text="操作类型"
    )
    resource_type = models.CharField(
        max_length=50,
        null=True,
        blank=True,
        help_text="资源类型"
    )
    resource_id = models.BigIntegerField(
        null=True,
        blank=True,
        help_text="资源ID"
    )
    ip_address = models.GenericIPAddressField(
        null=True,
        blank=True,
        help_text="IP地址"
    )
    user_agent = models.TextField(
        blank=True,
        default='',
        help_text="User Agent"
    )
    metadata = models.JSONField(
        default=dict,
        help_text="附加元数据"
    )
    created_at = models.DateTimeField(
        auto_now_add=True,
        db_index=True
    )

    class Meta:
        db_table = 'audit_log'
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['resource_type', 'resource_id'], name='audit_log_resource_idx'),
        ]

    def __str__(self):
        return f"{self.user_id} - {self.action} - {self.created_at}"

    @classmethod
    def log_action(
        cls,
        action,
        user=None,
        user_id=None,
        resource_type=None,
        resource_id=None,
        ip_address=None,
        user_agent=None,
        metadata=None
    ):
        """记录操作日志，关闭审计时返回 None"""
        from ..conf import is_feature_enabled

        if not is_feature_enabled('audit_log'):
            return None

        return cls.objects.create(
            user_id=user.id if user is not None else user_id,
            action=action,
            resource_type=resource_type,
            resource_id=resource_id,
            ip_address=ip_address,
            user_agent=user_agent or '',
            metadata=metadata or {}
        )

    @staticmethod
    def get_client_ip(request):
        """获取客户端IP地址"""
        x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
        if x_forwarded_for:
            ip = x_forwarded_for.split(',')[0].strip()
        else:
            ip = request.META.get('REMOTE_ADDR')
        return ip or None
