"""
工作空间服务 - 创建、查询、更新、删除以及成员管理

所有权检查在这里完成：只有创建者可以修改、删除工作空间或管理成员，
创建者和成员都可以查看工作空间。
"""

import logging
from typing import Any, Dict, List, Optional

from django.db import transaction

from ..conf import workspace_settings
from ..constants import AUDIT_ACTIONS, WORKSPACE_NAME_MAX_LENGTH
from ..exceptions import (
    PermissionDenied,
    UserNotFoundError,
    ValidationError,
    WorkspaceNotFoundError
)
from ..models import AuditLog, User, Workspace, WorkspaceMember


logger = logging.getLogger(__name__)


class WorkspaceService:
    """工作空间服务"""

    def __init__(self):
        self.default_page_size = workspace_settings.DEFAULT_PAGE_SIZE
        self.max_page_size = workspace_settings.MAX_PAGE_SIZE

    # ------------------------------------------------------------------
    # 查询
    # ------------------------------------------------------------------

    def get_all_workspaces(self, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        """
        分页获取所有工作空间 (管理员)

        Args:
            page: 页码，从1开始
            limit: 每页数量，超过 MAX_PAGE_SIZE 时截断

        Returns:
            Dict[str, Any]: {items, total, page, limit}
        """
        return self._paginate(Workspace.objects.all(), page, limit)

    def get_workspaces_created_by_user(self, user_id: int, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        """分页获取用户创建的工作空间"""
        return self._paginate(Workspace.objects.filter(created_by_id=user_id), page, limit)

    def get_workspaces_where_member(self, user_id: int, page: Optional[int] = None, limit: Optional[int] = None) -> Dict[str, Any]:
        """分页获取用户作为成员加入的工作空间 (不含仅由其创建的工作空间)"""
        return self._paginate(Workspace.objects.filter(memberships__user_id=user_id), page, limit)

    def get_workspace_for_user(self, workspace_id: int, user_id: int) -> Dict[str, Any]:
        """
        获取单个工作空间，调用者必须是创建者或成员

        Args:
            workspace_id: 工作空间ID
            user_id: 调用者ID

        Returns:
            Dict[str, Any]: {workspace, owner, members}，owner 在数据不一致时为 None

        Raises:
            WorkspaceNotFoundError: 工作空间不存在
            PermissionDenied: 调用者既不是创建者也不是成员
        """
        workspace = self._get_workspace(workspace_id)
        self._ensure_can_view(workspace, user_id)

        owner = self._find_user(workspace.created_by_id)
        if owner is None:
            logger.warning(f"Workspace {workspace.id} has no owner record: created_by={workspace.created_by_id}")

        return {
            'workspace': workspace,
            'owner': owner,
            'members': self._list_members(workspace),
        }

    def get_workspace_members(self, workspace_id: int, user_id: int) -> List[User]:
        """获取工作空间成员列表，调用者必须是创建者或成员"""
        workspace = self._get_workspace(workspace_id)
        self._ensure_can_view(workspace, user_id)
        return self._list_members(workspace)

    # ------------------------------------------------------------------
    # 修改
    # ------------------------------------------------------------------

    def create_workspace(self, user_id: int, name: str) -> Workspace:
        """
        创建工作空间，调用者成为创建者

        Args:
            user_id: 创建者ID
            name: 工作空间名称

        Returns:
            Workspace: 创建的工作空间
        """
        name = self._clean_name(name)

        if not User.objects.filter(id=user_id).exists():
            raise UserNotFoundError(f"User not found: {user_id}")

        max_workspaces = workspace_settings.MAX_WORKSPACES_PER_USER
        if max_workspaces and Workspace.objects.filter(created_by_id=user_id).count() >= max_workspaces:
            raise ValidationError(f"Workspace limit reached: at most {max_workspaces} workspaces per user")

        with transaction.atomic():
            workspace = Workspace.objects.create(name=name, created_by_id=user_id)

            AuditLog.log_action(
                AUDIT_ACTIONS['WORKSPACE_CREATED'],
                user_id=user_id,
                resource_type='workspace',
                resource_id=workspace.id,
                metadata={'name': name}
            )

        logger.info(f"Workspace created: {workspace.id} by {user_id}")
        return workspace

    def update_workspace(self, workspace_id: int, user_id: int, name: Optional[str] = None) -> Workspace:
        """
        更新工作空间 (仅创建者)

        Args:
            workspace_id: 工作空间ID
            user_id: 调用者ID
            name: 新名称，None 表示不修改

        Returns:
            Workspace: 更新后的工作空间
        """
        workspace = self._get_workspace(workspace_id)
        self._ensure_owner(workspace, user_id, 'update')

        changes = {}
        if name is not None:
            name = self._clean_name(name)
            if name != workspace.name:
                changes['name'] = {'from': workspace.name, 'to': name}
            workspace.name = name

        with transaction.atomic():
            # updated_at 总是刷新
            workspace.save(update_fields=['name', 'updated_at'])

            AuditLog.log_action(
                AUDIT_ACTIONS['WORKSPACE_UPDATED'],
                user_id=user_id,
                resource_type='workspace',
                resource_id=workspace.id,
                metadata={'changes': changes}
            )

        logger.info(f"Workspace updated: {workspace.id} by {user_id}, changes={list(changes)}")
        return workspace

    def delete_workspace(self, workspace_id: int, user_id: int) -> None:
        """删除工作空间 (仅创建者)，成员关系级联删除"""
        workspace = self._get_workspace(workspace_id)
        self._ensure_owner(workspace, user_id, 'delete')

        with transaction.atomic():
            AuditLog.log_action(
                AUDIT_ACTIONS['WORKSPACE_DELETED'],
                user_id=user_id,
                resource_type='workspace',
                resource_id=workspace.id,
                metadata={'name': workspace.name, 'member_count': workspace.get_member_count()}
            )
            workspace.delete()

        logger.info(f"Workspace deleted: {workspace_id} by {user_id}")

    def add_member(self, workspace_id: int, member_id: int, user_id: int) -> Dict[str, Any]:
        """
        添加成员 (仅创建者)

        已经是成员时不做修改；创建者本身隐式拥有成员权限，不能被添加。

        Args:
            workspace_id: 工作空间ID
            member_id: 要添加的用户ID
            user_id: 调用者ID

        Returns:
            Dict[str, Any]: {memberId, message}
        """
        workspace = self._get_workspace(workspace_id)
        self._ensure_owner(workspace, user_id, 'add members to')
        member = self._get_user(member_id)

        if workspace.is_owned_by(member.id):
            raise ValidationError("The workspace owner is implicitly a member and cannot be added")

        with transaction.atomic():
            _, created = WorkspaceMember.objects.get_or_create(workspace=workspace, user=member)

            if created:
                AuditLog.log_action(
                    AUDIT_ACTIONS['WORKSPACE_MEMBER_ADDED'],
                    user_id=user_id,
                    resource_type='workspace',
                    resource_id=workspace.id,
                    metadata={'member_id': member.id}
                )

        if created:
            logger.info(f"Workspace member added: workspace={workspace.id}, member={member.id}")
            message = 'Member added to workspace'
        else:
            logger.info(f"Workspace member already present: workspace={workspace.id}, member={member.id}")
            message = 'User is already a member of this workspace'

        return {'memberId': member.id, 'message': message}

    def remove_member(self, workspace_id: int, member_id: int, user_id: int) -> Dict[str, Any]:
        """
        移除成员 (仅创建者)，不是成员时不做修改

        Returns:
            Dict[str, Any]: {memberId, message}
        """
        workspace = self._get_workspace(workspace_id)
        self._ensure_owner(workspace, user_id, 'remove members from')
        member = self._get_user(member_id)

        with transaction.atomic():
            deleted, _ = WorkspaceMember.objects.filter(workspace=workspace, user=member).delete()

            if deleted:
                AuditLog.log_action(
                    AUDIT_ACTIONS['WORKSPACE_MEMBER_REMOVED'],
                    user_id=user_id,
                    resource_type='workspace',
                    resource_id=workspace.id,
                    metadata={'member_id': member.id}
                )

        if deleted:
            logger.info(f"Workspace member removed: workspace={workspace.id}, member={member.id}")
            message = 'Member removed from workspace'
        else:
            logger.info(f"Workspace member not present: workspace={workspace.id}, member={member.id}")
            message = 'User is not a member of this workspace'

        return {'memberId': member.id, 'message': message}

    # ------------------------------------------------------------------
    # 内部方法
    # ------------------------------------------------------------------

    def _paginate(self, queryset, page: Optional[int], limit: Optional[int]) -> Dict[str, Any]:
        """offset = (page - 1) * limit"""
        page, limit = self._normalize_page_params(page, limit)
        offset = (page - 1) * limit

        queryset = queryset.order_by('id')
        total = queryset.count()
        items = list(queryset[offset:offset + limit])

        return {
            'items': items,
            'total': total,
            'page': page,
            'limit': limit,
        }

    def _normalize_page_params(self, page: Optional[int], limit: Optional[int]):
        page = 1 if page is None else page
        limit = self.default_page_size if limit is None else limit

        if page < 1:
            raise ValidationError("page must be greater than or equal to 1")
        if limit < 1:
            raise ValidationError("limit must be greater than or equal to 1")

        return page, min(limit, self.max_page_size)

    def _clean_name(self, name: Optional[str]) -> str:
        name = (name or '').strip()
        if not name:
            raise ValidationError("Workspace name is required", details={'name': ['This field may not be blank.']})
        if len(name) > WORKSPACE_NAME_MAX_LENGTH:
            raise ValidationError(f"Workspace name must be at most {WORKSPACE_NAME_MAX_LENGTH} characters")
        return name

    def _get_workspace(self, workspace_id: int) -> Workspace:
        try:
            return Workspace.objects.get(id=workspace_id)
        except Workspace.DoesNotExist:
            raise WorkspaceNotFoundError(f"Workspace not found: {workspace_id}")

    def _find_user(self, user_id: int) -> Optional[User]:
        return User.objects.filter(id=user_id).first()

    def _get_user(self, user_id: int) -> User:
        try:
            return User.objects.get(id=user_id)
        except User.DoesNotExist:
            raise UserNotFoundError(f"User not found: {user_id}")

    def _ensure_owner(self, workspace: Workspace, user_id: int, action: str):
        if not workspace.is_owned_by(user_id):
            logger.warning(f"Forbidden: user {user_id} tried to {action} workspace {workspace.id}")
            raise PermissionDenied(f"Only the workspace owner can {action} this workspace")

    def _ensure_can_view(self, workspace: Workspace, user_id: int):
        if not workspace.is_accessible_by(user_id):
            logger.warning(f"Forbidden: user {user_id} is not a member of workspace {workspace.id}")
            raise PermissionDenied("You are not a member of this workspace")

    def _list_members(self, workspace: Workspace) -> List[User]:
        return list(workspace.members.order_by('id'))
