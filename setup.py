"""
Setup script for adaptive-practice.

Adaptive Practice is the question-selection and mastery engine behind the
K-12 practice platform:

1. Progression Ladder - Bloom level x difficulty escalation per session
2. Mastery Tracking - Stars, proficiency and the mastered gate from full history
3. Class Analytics - Heatmaps, hardest concepts and suggested interventions

The 'adaptive-practice' command runs practice sessions over JSON question pools.
"""

from setuptools import find_packages, setup

setup(
    name="adaptive-practice",
    version="1.0.0",
    description="Adaptive question selection and mastery tracking for K-12 practice",
    long_description=open("README.md", encoding="utf-8").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    author="Adaptive Practice",
    packages=find_packages(exclude=("tests", "tests.*")),
    py_modules=["config"],
    python_requires=">=3.11",
    install_requires=[
        # CLI
        "typer>=0.9.0",
        "rich>=13.0.0",
        # Config & Validation
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
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
            "adaptive-practice=adaptive_practice.cli.main:run",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Environment :: Console",
        "Intended Audience :: Developers",
        "Intended Audience :: Education",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Education",
        "Topic :: Education :: Computer Aided Instruction (CAI)",
    ],
    keywords="learning adaptive-practice bloom mastery education",
)
