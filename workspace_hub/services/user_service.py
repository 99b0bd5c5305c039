"""
用户目录服务
"""

import logging
from typing import Optional

from ..constants import AUDIT_ACTIONS
from ..exceptions import UserNotFoundError, ValidationError
from ..models import AuditLog, User


logger = logging.getLogger(__name__)


class UserService:
    """用户服务"""

    def get_user(self, user_id: int) -> User:
        """获取用户 (预加载角色)"""
        try:
            return User.objects.prefetch_related('roles').get(id=user_id)
        except User.DoesNotExist:
            raise UserNotFoundError(f"User not found: {user_id}")

    def update_profile(self, user_id: int, name: Optional[str] = None) -> User:
        """
        更新个人资料

        Args:
            user_id: 用户ID
            name: 新的显示名称，None 表示不修改

        Returns:
            User: 更新后的用户
        """
        user = self.get_user(user_id)

        if name is not None:
            name = name.strip()
            if not name:
                raise ValidationError("Name must not be blank")
            user.name = name

        user.save(update_fields=['name', 'updated_at'])
        logger.info(f"Profile updated: user={user.id}")
        return user

    def set_active(self, user_id: int, is_active: bool, changed_by: Optional[int] = None) -> User:
        """激活或停用用户"""
        user = self.get_user(user_id)

        if user.is_active != is_active:
            user.is_active = is_active
            user.save(update_fields=['is_active', 'updated_at'])

            AuditLog.log_action(
                AUDIT_ACTIONS['USER_STATUS_CHANGED'],
                user_id=changed_by,
                resource_type='user',
                resource_id=user.id,
                metadata={'is_active': is_active}
            )
            logger.info(f"User status changed: user={user.id}, is_active={is_active}, by={changed_by}")

        return user
