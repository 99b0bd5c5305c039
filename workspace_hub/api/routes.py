"""
路由表

每条路由 = 方法 + 路径 + 处理函数 + 访问规则。
AccessControlMiddleware 读取这张表完成认证和角色检查，
urls.py 根据这张表生成 urlpatterns。

注意顺序：字面路径 (me / member / add-member / remove-member)
必须注册在 <int:workspace_id> 之前。
"""

from collections import OrderedDict

from django.urls import path
from rest_framework.decorators import api_view, authentication_classes, permission_classes

from ..access import AccessRule
from ..conf import workspace_settings
from ..exceptions import WorkspaceHubError
from ..middleware import ROUTE_TABLE_ATTR, access_checked, check_access
from . import views
from .errors import error_response


PUBLIC = AccessRule.public()
AUTHENTICATED = AccessRule.authenticated()
ADMIN_ONLY = AccessRule.require_roles(workspace_settings.ADMIN_ROLE)


class Route:
    """单条路由"""

    def __init__(self, method, pattern, handler, access, name):
        self.method = method.upper()
        self.pattern = pattern
        self.handler = handler
        self.access = access
        self.name = name

    def __repr__(self):
        return f"Route({self.method} {self.pattern} -> {self.handler.__name__}, {self.access!r})"


ROUTES = [
    # 认证
    Route('POST', 'auth/register', views.register, PUBLIC, 'auth-register'),
    Route('POST', 'auth/login', views.login, PUBLIC, 'auth-login'),
    Route('POST', 'auth/refresh', views.refresh, PUBLIC, 'auth-refresh'),
    Route('POST', 'auth/logout', views.logout, AUTHENTICATED, 'auth-logout'),

    # 用户
    Route('GET', 'users/me', views.get_profile, AUTHENTICATED, 'user-profile'),
    Route('PATCH', 'users/me', views.update_profile, AUTHENTICATED, 'user-profile-update'),
    Route('PATCH', 'users/<int:user_id>/status', views.set_user_status, ADMIN_ONLY, 'user-status'),
    Route('POST', 'users/<int:user_id>/roles', views.assign_user_role, ADMIN_ONLY, 'user-roles'),
    Route('DELETE', 'users/<int:user_id>/roles/<str:role_name>', views.revoke_user_role, ADMIN_ONLY, 'user-role-revoke'),

    # 角色
    Route('GET', 'roles', views.list_roles, AUTHENTICATED, 'role-list'),

    # 工作空间 - 字面路径
    Route('GET', 'workspaces', views.list_all_workspaces, ADMIN_ONLY, 'workspace-list'),
    Route('POST', 'workspaces', views.create_workspace, AUTHENTICATED, 'workspace-create'),
    Route('GET', 'workspaces/me', views.list_my_workspaces, AUTHENTICATED, 'workspace-mine'),
    Route('GET', 'workspaces/member', views.list_member_workspaces, AUTHENTICATED, 'workspace-joined'),
    Route('PATCH', 'workspaces/add-member', views.add_workspace_member, AUTHENTICATED, 'workspace-add-member'),
    Route('PATCH', 'workspaces/remove-member', views.remove_workspace_member, AUTHENTICATED, 'workspace-remove-member'),

    # 工作空间 - 参数路径，放在最后
    Route('GET', 'workspaces/<int:workspace_id>/members', views.list_workspace_members, AUTHENTICATED, 'workspace-members'),
    Route('GET', 'workspaces/<int:workspace_id>', views.get_workspace, AUTHENTICATED, 'workspace-detail'),
    Route('PATCH', 'workspaces/<int:workspace_id>', views.update_workspace, AUTHENTICATED, 'workspace-update'),
    Route('DELETE', 'workspaces/<int:workspace_id>', views.delete_workspace, AUTHENTICATED, 'workspace-delete'),
]


def group_routes(routes):
    """按路径分组，保持注册顺序；同一路径同一方法只能注册一次"""
    grouped = OrderedDict()
    for route in routes:
        by_method = grouped.setdefault(route.pattern, OrderedDict())
        if route.method in by_method:
            raise ValueError(f"Duplicate route: {route.method} {route.pattern}")
        by_method[route.method] = route
    return grouped


def make_view(by_method):
    """
    为一个路径生成 DRF 视图，按请求方法分发给处理函数

    认证和角色检查通常由 AccessControlMiddleware 完成，因此关闭 DRF 自带的认证和权限类。
    中间件没有运行时 (例如未加入 MIDDLEWARE) 在这里补做同样的检查。
    """
    @api_view(list(by_method))
    @authentication_classes([])
    @permission_classes([])
    def dispatch(request, **kwargs):
        route = by_method[request.method]
        try:
            if not access_checked(request):
                check_access(request, route)
            return route.handler(request, **kwargs)
        except WorkspaceHubError as e:
            return error_response(e)

    setattr(dispatch, ROUTE_TABLE_ATTR, dict(by_method))
    return dispatch


def build_urlpatterns(routes=None):
    """根据路由表生成 urlpatterns"""
    patterns = []
    for pattern, by_method in group_routes(routes or ROUTES).items():
        first_route = next(iter(by_method.values()))
        patterns.append(path(pattern, make_view(by_method), name=first_route.name))
    return patterns
