"""
访问控制中间件

根据路由表中声明的访问规则完成认证和角色检查。
所有权检查需要先加载工作空间，因此在服务层完成。
"""

import logging

from django.http import JsonResponse

from .api.errors import error_payload
from .authentication import authenticate_request
from .exceptions import PermissionDenied, WorkspaceHubError


logger = logging.getLogger(__name__)

ROUTE_TABLE_ATTR = 'workspace_hub_routes'
ACCESS_CHECKED_ATTR = 'workspace_hub_access_checked'


def check_access(request, route):
    """
    认证 + 角色检查

    通过时在 request 上设置 auth_user / auth_user_id / auth_roles，
    并标记该请求已经过检查。

    Raises:
        AuthenticationError: 令牌缺失或无效
        PermissionDenied: 缺少所需角色
    """
    rule = route.access
    if not rule.requires_authentication:
        setattr(request, ACCESS_CHECKED_ATTR, True)
        return None

    user = authenticate_request(request)
    role_names = user.role_names

    request.auth_user = user
    request.auth_user_id = user.id
    request.auth_roles = role_names

    if not rule.allows_roles(role_names):
        raise PermissionDenied(
            f"Requires one of roles: {', '.join(sorted(rule.roles))}"
        )

    setattr(request, ACCESS_CHECKED_ATTR, True)
    return user


def access_checked(request):
    """请求是否已通过 check_access"""
    return getattr(request, ACCESS_CHECKED_ATTR, False) is True


class AccessControlMiddleware:
    """只处理路由表注册过的视图，其他视图直接放行"""

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_view(self, request, view_func, view_args, view_kwargs):
        routes = getattr(view_func, ROUTE_TABLE_ATTR, None)
        if not routes:
            return None

        route = routes.get(request.method)

        try:
            if route is not None:
                check_access(request, route)
            elif all(r.access.requires_authentication for r in routes.values()):
                # 先认证，再交给视图返回 405
                authenticate_request(request)
        except WorkspaceHubError as e:
            logger.info(f"Access denied: {request.method} {request.path} ({e.error_code})")
            return JsonResponse(error_payload(e), status=e.status_code)

        return None
