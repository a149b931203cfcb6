"""
Setup script for flashlearn-auth.

FlashLearn Auth is the client-side authentication core of the FlashLearn
learning app. It provides:

1. Mock Auth - In-memory accounts for local development without Firebase
2. Session State - One active session with listener fan-out and a
   persisted snapshot that survives restarts
3. Backend Client - Login/register against the FlashLearn API

The 'flashlearn' command drives all of the above from the terminal.
"""

from setuptools import find_packages, setup

setup(
    name="flashlearn-auth",
    version="0.1.0",
    description="Client-side authentication and session core for FlashLearn",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="FlashLearn",
    packages=find_packages(exclude=["tests", "tests.*"]),
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
            "flashlearn=flashlearn.cli:run",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
    ],
    keywords="learning flashcards authentication session",
)
