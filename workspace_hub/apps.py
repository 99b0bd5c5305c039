import logging

from django.apps import AppConfig
from django.core.exceptions import ImproperlyConfigured


logger = logging.getLogger(__name__)


class WorkspaceHubConfig(AppConfig):
    """Workspace Hub 应用配置"""

    default_auto_field = 'django.db.models.BigAutoField'
    name = 'workspace_hub'
    verbose_name = 'Workspace Hub'

    def ready(self):
        """应用初始化时校验配置"""
        from .conf import workspace_settings

        try:
            workspace_settings.validate()
        except ImproperlyConfigured as e:
            logger.warning(f"Workspace Hub configuration issue: {str(e)}")
            logger.warning("Run 'python manage.py init_workspace_hub --check-only' for details")
        else:
            logger.debug("Workspace Hub configuration validated")
