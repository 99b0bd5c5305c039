"""
Workspace Hub - 极简配置
只需要配置 SECRET_KEY，其他都有默认值
"""

from decouple import Csv, config as env_config
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from .constants import (
    DEFAULT_ACCESS_TOKEN_LIFETIME,
    DEFAULT_PAGE_SIZE,
    DEFAULT_REFRESH_TOKEN_LIFETIME,
    DEFAULT_ROLES,
    MAX_PAGE_SIZE,
    MIN_JWT_SECRET_LENGTH,
    UserRole,
)


class WorkspaceHubSettings:
    """
    极简配置类 - 大部分配置都有智能默认值

    查找顺序:
        1. settings.WORKSPACE_HUB 字典
        2. 环境变量 / .env 文件 (WORKSPACE_HUB_<NAME>)
        3. DEFAULTS
    """

    ENV_PREFIX = 'WORKSPACE_HUB_'

    DEFAULTS = {
        # JWT配置 - 密钥默认使用Django的SECRET_KEY
        'JWT_SECRET_KEY': None,
        'JWT_ALGORITHM': 'HS256',
        'JWT_ACCESS_TOKEN_LIFETIME': DEFAULT_ACCESS_TOKEN_LIFETIME,
        'JWT_REFRESH_TOKEN_LIFETIME': DEFAULT_REFRESH_TOKEN_LIFETIME,

        # 分页配置
        'DEFAULT_PAGE_SIZE': DEFAULT_PAGE_SIZE,
        'MAX_PAGE_SIZE': MAX_PAGE_SIZE,

        # 角色配置
        'ADMIN_ROLE': UserRole.ADMIN,
        'DEFAULT_ROLES': DEFAULT_ROLES,
        'DEFAULT_USER_ROLE': UserRole.MEMBER,

        # 功能开关
        'ENABLE_REGISTRATION': True,
        'ACTIVATE_ON_REGISTRATION': True,
        'ENABLE_AUDIT_LOG': True,

        # 限制配置 (0 表示不限制)
        'MAX_WORKSPACES_PER_USER': 100,
        'PASSWORD_MIN_LENGTH': 8,
    }

    @property
    def user_settings(self):
        # 每次读取，保证 override_settings 生效
        return getattr(settings, 'WORKSPACE_HUB', {})

    def __getattr__(self, name):
        """智能配置获取"""
        if name not in self.DEFAULTS:
            raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")

        # 1. 先检查用户是否显式配置
        if name in self.user_settings:
            return self.user_settings[name]

        # 2. 检查环境变量
        default_value = self.DEFAULTS[name]
        env_value = env_config(f'{self.ENV_PREFIX}{name}', default=None, cast=self._env_cast(default_value))
        if env_value is not None:
            return env_value

        # 3. 特殊处理JWT密钥，回退到Django的SECRET_KEY
        if name == 'JWT_SECRET_KEY':
            return getattr(settings, 'SECRET_KEY', '')

        return default_value

    @staticmethod
    def _env_cast(default_value):
        """根据默认值类型确定环境变量的转换方式"""
        if isinstance(default_value, bool):
            return lambda value: value if value is None else str(value).lower() in ('1', 'true', 'yes', 'on')
        if isinstance(default_value, int):
            return lambda value: value if value is None else int(value)
        if isinstance(default_value, list):
            return lambda value: value if value is None else Csv()(value)
        return lambda value: value

    def validate(self):
        """只验证必需的配置"""
        secret_key = self.JWT_SECRET_KEY
        if not secret_key:
            raise ImproperlyConfigured(
                "JWT_SECRET_KEY is required. "
                "Configure WORKSPACE_HUB['JWT_SECRET_KEY'] or set SECRET_KEY in settings.py"
            )
        if len(secret_key) < MIN_JWT_SECRET_LENGTH:
            raise ImproperlyConfigured(
                f"JWT_SECRET_KEY must be at least {MIN_JWT_SECRET_LENGTH} characters long"
            )

        if self.MAX_PAGE_SIZE < 1 or self.DEFAULT_PAGE_SIZE < 1:
            raise ImproperlyConfigured("DEFAULT_PAGE_SIZE and MAX_PAGE_SIZE must be positive")

        if self.DEFAULT_USER_ROLE and self.DEFAULT_USER_ROLE not in self.DEFAULT_ROLES:
            raise ImproperlyConfigured(
                f"DEFAULT_USER_ROLE '{self.DEFAULT_USER_ROLE}' must be listed in DEFAULT_ROLES"
            )


# 全局配置实例
workspace_settings = WorkspaceHubSettings()


# 便捷函数
def get_setting(name, default=None):
    """便捷函数：获取配置项"""
    try:
        return getattr(workspace_settings, name)
    except AttributeError:
        return default


def is_feature_enabled(feature_name):
    """便捷函数：检查功能是否开启"""
    return bool(get_setting(f'ENABLE_{feature_name.upper()}', False))
