"""
SQL Monitor 项目构建配置

Query discovery and dispatch core for the SQL Server metrics agent.
"""

from setuptools import setup, find_packages
import os

# 读取 README 文件
def read_readme():
    if not os.path.exists("README.md"):
        return ""
    with open("README.md", "r", encoding="utf-8") as fh:
        return fh.read()

# 读取依赖文件
def read_requirements(path):
    requirements = []
    if os.path.exists(path):
        with open(path, "r", encoding="utf-8") as fh:
            requirements = [line.strip() for line in fh if line.strip() and not line.startswith("#")]
    return requirements

setup(
    name="sqlmonitor-core",
    version="0.1.0",
    description="Query discovery and dispatch core for a SQL Server metrics agent",
    long_description=read_readme(),
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sqlmonitor", "sqlmonitor.*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: System Administrators",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Database",
        "Topic :: System :: Monitoring",
    ],
    python_requires=">=3.9",
    install_requires=read_requirements("requirements.txt"),
    extras_require={
        "dev": read_requirements("requirements-dev.txt"),
        "mssql": [
            "pyodbc>=4.0.35",
        ],
    },
    include_package_data=True,
    package_data={
        "sqlmonitor": [
            "config/*.yaml",
            "queries/*.sql",
            "queries/*/*.sql",
        ],
    },
    zip_safe=False,
    keywords=[
        "sql-server",
        "monitoring",
        "metrics",
        "agent",
    ],
)
