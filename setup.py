from setuptools import setup, find_packages

setup(
    name="notion-progress-api",
    version="1.0.0",
    description="Notion database progress bars and visit counters as JSON, SVG or HTML (FastAPI)",
    packages=find_packages(include=["progress_api", "progress_api.*"]),
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.110",
        "uvicorn>=0.27",
        "httpx>=0.27",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
        "python-dotenv>=1.0",
        "redis>=5.0.1",
        "tzdata",
    ],
    extras_require={
        "test": ["pytest>=7.4"],
    },
)
