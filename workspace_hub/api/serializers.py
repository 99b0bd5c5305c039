"""
请求/响应序列化器 (JSON 使用 camelCase)
"""

from rest_framework import serializers

from ..constants import WORKSPACE_NAME_MAX_LENGTH
from ..models import Role, User, Workspace


# ----------------------------------------------------------------------
# 响应
# ----------------------------------------------------------------------

class MemberSerializer(serializers.ModelSerializer):
    """成员/所有者摘要，不包含密码"""

    class Meta:
        model = User
        fields = ['id', 'name', 'email']
        read_only_fields = fields


class UserSerializer(serializers.ModelSerializer):
    """用户详情，不包含密码"""

    isActive = serializers.BooleanField(source='is_active', read_only=True)
    roles = serializers.SlugRelatedField(many=True, read_only=True, slug_field='name')
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'isActive', 'roles', 'createdAt']


class RoleSerializer(serializers.ModelSerializer):
    """角色"""

    class Meta:
        model = Role
        fields = ['id', 'name', 'description']


class WorkspaceSerializer(serializers.ModelSerializer):
    """工作空间摘要"""

    createdById = serializers.IntegerField(source='created_by_id', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Workspace
        fields = ['id', 'name', 'createdById', 'createdAt', 'updatedAt']


def paginated_workspaces(page):
    """分页结果 -> 响应体"""
    return {
        'items': WorkspaceSerializer(page['items'], many=True).data,
        'total': page['total'],
        'page': page['page'],
        'limit': page['limit'],
    }


# ----------------------------------------------------------------------
# 请求
# ----------------------------------------------------------------------

class PaginationParamsSerializer(serializers.Serializer):
    """?page&limit，limit 上限在服务层截断"""

    page = serializers.IntegerField(min_value=1, default=1)
    limit = serializers.IntegerField(min_value=1, required=False)


class CreateWorkspaceSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=WORKSPACE_NAME_MAX_LENGTH, allow_blank=False, trim_whitespace=True)


class UpdateWorkspaceSerializer(serializers.Serializer):
    name = serializers.CharField(
        max_length=WORKSPACE_NAME_MAX_LENGTH,
        allow_blank=False,
        trim_whitespace=True,
        required=False
    )


class MemberChangeSerializer(serializers.Serializer):
    """添加/移除成员"""

    workspaceId = serializers.IntegerField(min_value=1)
    memberId = serializers.IntegerField(min_value=1)


class RegisterSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    name = serializers.CharField(max_length=255, required=False, allow_blank=True, default='')


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField(max_length=255)
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class RefreshTokenSerializer(serializers.Serializer):
    refreshToken = serializers.CharField()


class UpdateProfileSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=255, allow_blank=False, required=False)


class UserStatusSerializer(serializers.Serializer):
    isActive = serializers.BooleanField()


class AssignRoleSerializer(serializers.Serializer):
    role = serializers.CharField(max_length=50)
