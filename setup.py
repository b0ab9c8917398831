# setup.py
from setuptools import setup, find_packages

setup(
    name="discover",
    version="0.2.0",
    description="Асинхронный перебор путей на веб-сервере по словарю",
    packages=find_packages(exclude=["tests", "tests.*"]),  # найдёт discover и discover.bruteforce
    install_requires=[
        "aiohttp>=3.9",
        "yarl>=1.9",
        "click>=8.1",
        "pydantic>=2.0",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "discover=discover.cli:cli",
        ],
    },
    python_requires=">=3.10",
)
