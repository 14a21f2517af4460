"""
Setup script for arsenal-cli.

Arsenal CLI is the terminal companion for the Arsenal learning assistant.
It keeps code learnings captured in a project in sync with Arsenal:

1. init   - Bind a working directory to an Arsenal project
2. sync   - Upload pending learnings, keeping failed ones for retry
3. link   - Sync automatically from a git pre-push hook

The 'arsenal' command is the only entry point.
"""

from setuptools import find_packages, setup

setup(
    name="arsenal-cli",
    version="0.1.0",
    description="CLI for the Arsenal learning assistant",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Arsenal",
    packages=find_packages(include=["arsenal", "arsenal.*"]),
    python_requires=">=3.10",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        # HTTP
        "httpx>=0.25.0",
        # Logging
        "loguru>=0.7.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.0.0",
            "ruff>=0.1.0",
            "mypy>=1.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "arsenal=arsenal.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Software Development",
    ],
    keywords="learning cli git-hooks sync",
)
