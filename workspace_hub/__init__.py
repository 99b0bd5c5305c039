"""
Workspace Hub

一个极简的多租户工作空间管理后端。

核心设计原则：
- 用户通过角色获得粗粒度权限 (admin / member)
- 工作空间只有一个创建者，创建者管理成员
- 所有权检查在服务层完成，角色检查在网关完成
"""

__version__ = "1.0.0"
__author__ = "Workspace Hub Team"
__description__ = "极简多租户工作空间管理库"
