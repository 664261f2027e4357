from setuptools import find_packages, setup

setup(
    name="agent-memory",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    python_requires=">=3.10",
    install_requires=[
        "pydantic-ai-slim>=1.51.0",
        "chromadb>=0.6.0",
        "structlog>=24.0.0",
        "python-dotenv>=1.0.0",
        "pydantic>=2.0.0",
        "opentelemetry-api>=1.20.0",
        "opentelemetry-sdk>=1.20.0",
    ],
    extras_require={
        "lancedb": [
            "lancedb>=0.13.0",
            "pyarrow>=14.0.0",
            "sentence-transformers>=2.7.0",
        ],
        "postgres": [
            "sqlalchemy>=2.0.0",
            "pgvector>=0.2.5",
            "psycopg[binary]>=3.1.0",
            "sentence-transformers>=2.7.0",
        ],
        "qdrant": [
            "qdrant-client>=1.10.0",
            "sentence-transformers>=2.7.0",
        ],
        "all": [
            "lancedb>=0.13.0",
            "pyarrow>=14.0.0",
            "sqlalchemy>=2.0.0",
            "pgvector>=0.2.5",
            "psycopg[binary]>=3.1.0",
            "qdrant-client>=1.10.0",
            "sentence-transformers>=2.7.0",
        ],
        "test": [
            "pytest>=8.0.0",
            "pytest-asyncio>=0.23.0",
        ],
    },
)
