"""
路由处理函数

认证和角色检查已由 AccessControlMiddleware 完成，
这里只负责参数校验、调用服务和序列化结果。
"""

from rest_framework import status
from rest_framework.response import Response

from ..models import AuditLog
from ..services import AuthService, RoleService, UserService, WorkspaceService
from .errors import raise_for_serializer
from .serializers import (
    AssignRoleSerializer,
    CreateWorkspaceSerializer,
    LoginSerializer,
    MemberChangeSerializer,
    MemberSerializer,
    PaginationParamsSerializer,
    RefreshTokenSerializer,
    RegisterSerializer,
    RoleSerializer,
    UpdateProfileSerializer,
    UpdateWorkspaceSerializer,
    UserSerializer,
    UserStatusSerializer,
    WorkspaceSerializer,
    paginated_workspaces,
)


def _pagination_params(request):
    params = raise_for_serializer(PaginationParamsSerializer(data=request.query_params), 'Invalid pagination parameters')
    return params['page'], params.get('limit')


def _client_info(request):
    return {
        'ip_address': AuditLog.get_client_ip(request),
        'user_agent': request.META.get('HTTP_USER_AGENT', ''),
    }


# ----------------------------------------------------------------------
# 工作空间
# ----------------------------------------------------------------------

def list_all_workspaces(request):
    """所有工作空间 (admin)"""
    page, limit = _pagination_params(request)
    result = WorkspaceService().get_all_workspaces(page, limit)
    return Response(paginated_workspaces(result), status=status.HTTP_200_OK)


def list_my_workspaces(request):
    """当前用户创建的工作空间"""
    page, limit = _pagination_params(request)
    result = WorkspaceService().get_workspaces_created_by_user(request.auth_user_id, page, limit)
    return Response(paginated_workspaces(result), status=status.HTTP_200_OK)


def list_member_workspaces(request):
    """当前用户作为成员加入的工作空间"""
    page, limit = _pagination_params(request)
    result = WorkspaceService().get_workspaces_where_member(request.auth_user_id, page, limit)
    return Response(paginated_workspaces(result), status=status.HTTP_200_OK)


def get_workspace(request, workspace_id):
    """创建者或成员查看工作空间"""
    result = WorkspaceService().get_workspace_for_user(workspace_id, request.auth_user_id)
    owner = result['owner']
    return Response({
        'workspace': WorkspaceSerializer(result['workspace']).data,
        'owner': MemberSerializer(owner).data if owner is not None else None,
        'members': MemberSerializer(result['members'], many=True).data,
    }, status=status.HTTP_200_OK)


def create_workspace(request):
    data = raise_for_serializer(CreateWorkspaceSerializer(data=request.data))
    workspace = WorkspaceService().create_workspace(request.auth_user_id, data['name'])
    return Response(WorkspaceSerializer(workspace).data, status=status.HTTP_201_CREATED)


def update_workspace(request, workspace_id):
    data = raise_for_serializer(UpdateWorkspaceSerializer(data=request.data))
    workspace = WorkspaceService().update_workspace(workspace_id, request.auth_user_id, name=data.get('name'))
    return Response(WorkspaceSerializer(workspace).data, status=status.HTTP_200_OK)


def delete_workspace(request, workspace_id):
    WorkspaceService().delete_workspace(workspace_id, request.auth_user_id)
    return Response(status=status.HTTP_204_NO_CONTENT)


def list_workspace_members(request, workspace_id):
    members = WorkspaceService().get_workspace_members(workspace_id, request.auth_user_id)
    return Response(MemberSerializer(members, many=True).data, status=status.HTTP_200_OK)


def add_workspace_member(request):
    data = raise_for_serializer(MemberChangeSerializer(data=request.data))
    result = WorkspaceService().add_member(data['workspaceId'], data['memberId'], request.auth_user_id)
    return Response(result, status=status.HTTP_200_OK)


def remove_workspace_member(request):
    data = raise_for_serializer(MemberChangeSerializer(data=request.data))
    result = WorkspaceService().remove_member(data['workspaceId'], data['memberId'], request.auth_user_id)
    return Response(result, status=status.HTTP_200_OK)


# ----------------------------------------------------------------------
# 认证
# ----------------------------------------------------------------------

def register(request):
    data = raise_for_serializer(RegisterSerializer(data=request.data))
    result = AuthService().register_user(
        email=data['email'],
        password=data['password'],
        name=data.get('name', ''),
        **_client_info(request)
    )

    body = {'user': UserSerializer(result['user']).data}
    if 'tokens' in result:
        body['tokens'] = result['tokens']
    return Response(body, status=status.HTTP_201_CREATED)


def login(request):
    data = raise_for_serializer(LoginSerializer(data=request.data))
    result = AuthService().authenticate_user(data['email'], data['password'], **_client_info(request))
    return Response({
        'user': UserSerializer(result['user']).data,
        'tokens': result['tokens'],
    }, status=status.HTTP_200_OK)


def refresh(request):
    data = raise_for_serializer(RefreshTokenSerializer(data=request.data))
    tokens = AuthService().refresh_access_token(data['refreshToken'])
    return Response({'tokens': tokens}, status=status.HTTP_200_OK)


def logout(request):
    AuthService().logout_user(request.auth_user_id, **_client_info(request))
    return Response(status=status.HTTP_204_NO_CONTENT)


# ----------------------------------------------------------------------
# 用户
# ----------------------------------------------------------------------

def get_profile(request):
    user = UserService().get_user(request.auth_user_id)
    return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


def update_profile(request):
    data = raise_for_serializer(UpdateProfileSerializer(data=request.data))
    user = UserService().update_profile(request.auth_user_id, name=data.get('name'))
    return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


def set_user_status(request, user_id):
    """激活/停用用户 (admin)"""
    data = raise_for_serializer(UserStatusSerializer(data=request.data))
    user = UserService().set_active(user_id, data['isActive'], changed_by=request.auth_user_id)
    return Response(UserSerializer(user).data, status=status.HTTP_200_OK)


def assign_user_role(request, user_id):
    """分配角色 (admin)"""
    data = raise_for_serializer(AssignRoleSerializer(data=request.data))
    RoleService().assign_role(user_id, data['role'], assigned_by=request.auth_user_id)
    return Response(UserSerializer(UserService().get_user(user_id)).data, status=status.HTTP_200_OK)


def revoke_user_role(request, user_id, role_name):
    """撤销角色 (admin)"""
    RoleService().revoke_role(user_id, role_name, revoked_by=request.auth_user_id)
    return Response(UserSerializer(UserService().get_user(user_id)).data, status=status.HTTP_200_OK)


# ----------------------------------------------------------------------
# 角色
# ----------------------------------------------------------------------

def list_roles(request):
    roles = RoleService().list_roles()
    return Response(RoleSerializer(roles, many=True).data, status=status.HTTP_200_OK)
