"""
Workspace Hub
多用户工作空间后端 - 角色、工作空间所有权与成员管理
"""

from setuptools import setup, find_packages
import os

# 读取 README 文件
def read_readme():
    readme_path = os.path.join(os.path.dirname(__file__), 'README.md')
    if os.path.exists(readme_path):
        with open(readme_path, 'r', encoding='utf-8') as f:
            return f.read()
    return "Workspace Hub - 多用户工作空间后端"

TEST_REQUIRES = [
    "pytest>=7.4.0",
    "pytest-django>=4.5.0",
    "pytest-cov>=4.1.0",
    "factory-boy>=3.3.0",
    "faker>=18.6.0",
]

setup(
    name="workspace-hub",
    version="1.0.0",
    description="多用户工作空间后端 - 用户、角色、工作空间和成员管理的 REST API",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["*.tests", "*.tests.*"]),
    include_package_data=True,
    package_data={
        "workspace_hub": [
            "management/**/*",
            "migrations/**/*",
        ],
    },
    classifiers=[
        "Environment :: Web Environment",
        "Framework :: Django",
        "Framework :: Django :: 4.2",
        "Framework :: Django :: 5.0",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Internet :: WWW/HTTP :: Dynamic Content",
        "Topic :: Software Development :: Libraries :: Application Frameworks",
    ],
    keywords="django workspace multi-user rbac rest-api jwt",
    python_requires=">=3.8",
    install_requires=[
        "Django>=4.2",
        "djangorestframework>=3.14.0",
        "django-cors-headers>=4.0.0",
        "python-decouple>=3.8",
        "PyJWT>=2.8.0",
    ],
    extras_require={
        "test": TEST_REQUIRES,
        "dev": TEST_REQUIRES + [
            "black>=23.3.0",
            "flake8>=6.0.0",
            "isort>=5.12.0",
            "mypy>=1.4.0",
        ],
        "postgres": [
            "psycopg2-binary>=2.9.0",
        ],
    },
    zip_safe=False,
    platforms=["any"],
    license="MIT",
)
