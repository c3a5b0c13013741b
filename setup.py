# setup.py
from setuptools import setup, find_packages

setup(
    name="favicon_scout",
    version="0.1.0",
    description="Асинхронный поиск и кэширование иконок сайтов FaviconScout",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"favicon_scout": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "pydantic>=2.5",
        "PyYAML>=6.0",
        "click>=8.1",
        "Jinja2>=3.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["favicon-scout=favicon_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
