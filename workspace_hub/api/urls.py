"""
Workspace Hub - REST API 路由

在项目中挂载:
    path('api/', include('workspace_hub.api.urls'))
"""

from .routes import build_urlpatterns


app_name = 'workspace_hub'

urlpatterns = build_urlpatterns()
