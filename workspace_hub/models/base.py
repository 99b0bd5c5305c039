"""
基础模型类
"""

from django.db import models


class TimestampedModel(models.Model):
    """基础模型类，自增主键 + 时间戳"""

    created_at = models.DateTimeField(
        auto_now_add=True
    )
    updated_at = models.DateTimeField(
        auto_now=True
    )

    class Meta:
        abstract = True
        ordering = ['id']
