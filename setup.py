"""
Setup script for the cloudsql_backup_resource package.
"""

from setuptools import setup, find_packages

setup(
    name="cloudsql_backup_resource",
    version="0.1.0",
    description="Cloud SQL backup runs as a check/in/out pipeline resource",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["resource_exceptions"],
    install_requires=[
        "pydantic>=2.0.0,<3.0.0",
        "pydantic-settings>=2.0.0",
        "pyyaml>=6.0",
        "tenacity>=8.0.0",  # Polling loop
        "requests>=2.28.0",
        "google-auth>=2.0.0",
        "pytz>=2022.1",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-cov>=4.0.0",
            "black>=23.0.0",
            "isort>=5.12.0",
            "mypy>=1.0.0",
            "flake8>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "cloudsql-backup-check=cli.main:check_main",
            "cloudsql-backup-in=cli.main:in_main",
            "cloudsql-backup-out=cli.main:out_main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.9",
)
