# setup.py
from setuptools import find_packages, setup

setup(
    name="pinmap",
    version="0.1.0",
    python_requires=">=3.11",
    packages=find_packages(include=["pinmap", "pinmap.*"]),
    include_package_data=True,
    package_data={"pinmap": ["data/*.yaml"]},
    install_requires=[
        "fastapi>=0.110",
        "uvicorn[standard]>=0.29",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "SQLAlchemy[asyncio]>=2.0",
        "asyncpg>=0.29",
        "alembic>=1.13",
        "psycopg[binary]>=3.1",
        "structlog>=24.1",
        "sentry-sdk>=1.40",
        "limits>=3.6",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
            "httpx>=0.27",
            "python-dotenv>=1.0",
        ],
    },
)
