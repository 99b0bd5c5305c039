"""
角色服务 - 固定角色的注册表
"""

import logging
from typing import Iterable, List, Optional, Set

from django.db import transaction

from ..conf import workspace_settings
from ..constants import AUDIT_ACTIONS, ROLE_DESCRIPTIONS
from ..exceptions import RoleNotFoundError, UserNotFoundError
from ..models import AuditLog, Role, User, UserRole


logger = logging.getLogger(__name__)


class RoleService:
    """角色服务"""

    def ensure_default_roles(self) -> List[Role]:
        """
        确保默认角色存在

        Returns:
            List[Role]: 默认角色列表
        """
        roles = []
        for name in workspace_settings.DEFAULT_ROLES:
            role, created = Role.objects.get_or_create(
                name=name,
                defaults={'description': ROLE_DESCRIPTIONS.get(name, '')}
            )
            if created:
                logger.info(f"Role created: {name}")
            roles.append(role)
        return roles

    def list_roles(self) -> List[Role]:
        """所有角色"""
        return list(Role.objects.all())

    def get_role(self, role_name: str) -> Role:
        """按名称获取角色"""
        try:
            return Role.objects.get(name=role_name)
        except Role.DoesNotExist:
            raise RoleNotFoundError(f"Role not found: {role_name}")

    def assign_role(self, user_id: int, role_name: str, assigned_by: Optional[int] = None) -> User:
        """
        为用户分配角色，已拥有时不做任何修改

        Args:
            user_id: 用户ID
            role_name: 角色名称
            assigned_by: 操作人ID

        Returns:
            User: 用户对象
        """
        user = self._get_user(user_id)
        role = self.get_role(role_name)

        with transaction.atomic():
            _, created = UserRole.objects.get_or_create(user=user, role=role)

            if created:
                AuditLog.log_action(
                    AUDIT_ACTIONS['ROLE_ASSIGNED'],
                    user_id=assigned_by,
                    resource_type='user',
                    resource_id=user.id,
                    metadata={'role': role_name}
                )

        if created:
            logger.info(f"Role assigned: user={user.id}, role={role_name}, by={assigned_by}")
        return user

    def revoke_role(self, user_id: int, role_name: str, revoked_by: Optional[int] = None) -> User:
        """撤销用户角色，未拥有时不做任何修改"""
        user = self._get_user(user_id)
        role = self.get_role(role_name)

        with transaction.atomic():
            deleted, _ = UserRole.objects.filter(user=user, role=role).delete()

            if deleted:
                AuditLog.log_action(
                    AUDIT_ACTIONS['ROLE_REVOKED'],
                    user_id=revoked_by,
                    resource_type='user',
                    resource_id=user.id,
                    metadata={'role': role_name}
                )

        if deleted:
            logger.info(f"Role revoked: user={user.id}, role={role_name}, by={revoked_by}")
        else:
            logger.warning(f"Role not held, nothing to revoke: user={user.id}, role={role_name}")
        return user

    def get_role_names(self, user_id: int) -> Set[str]:
        """获取用户的角色名称集合"""
        return set(
            Role.objects.filter(user_links__user_id=user_id).values_list('name', flat=True)
        )

    def has_any_role(self, user_id: int, role_names: Iterable[str]) -> bool:
        """是否拥有任意一个指定角色"""
        return bool(self.get_role_names(user_id) & set(role_names))

    def _get_user(self, user_id: int) -> User:
        try:
            return User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise UserNotFoundError(f"User not found: {user_id}")
