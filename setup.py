# setup.py
from setuptools import setup, find_packages

setup(
    name="roastmap",
    version="1.0.0",
    description="Sitemap-driven cache warmer: requests every URL of a site's sitemaps",
    packages=find_packages(include=["roastmap", "roastmap.*"]),
    package_data={"roastmap": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "click>=8.1",
        "jinja2>=3.1",
        "lxml>=5.0",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "rich>=13.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["roastmap=roastmap.cli:cli"],
    },
    python_requires=">=3.11",
)
