"""Setup configuration for the Factocord Discord bot."""

from setuptools import setup, find_packages

setup(
    name="factocord",
    version="0.1.0",
    description="A Discord bot for Factorio modding API documentation, wiki pages and server FAQs",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.11",
    install_requires=[
        "py-cord>=2.6",
        "python-dotenv>=1.0",
        "PyYAML>=6.0",
        "aiosqlite>=0.20",
        "prompt_toolkit>=3.0",
        "requests>=2.31",
        "mwparserfromhell>=0.6.6",
        "beautifulsoup4>=4.12",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "factocord=factocord.main:main",
        ],
    },
)
