# setup.py
from setuptools import setup, find_packages

setup(
    name="site_keeper",
    version="0.1.0",
    description="SiteKeeper: сборка статических сайтов и проверка опубликованных эндпоинтов",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "Jinja2>=3.1",
        "Markdown>=3.5",
        "MarkupSafe>=2.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["site-keeper=site_keeper.cli:cli"],
    },
    python_requires=">=3.11",
)
