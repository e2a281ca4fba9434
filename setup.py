from __future__ import annotations

from pathlib import Path

from setuptools import find_packages, setup

PROJECT_ROOT = Path(__file__).resolve().parent
README = (PROJECT_ROOT / "README.md").read_text(encoding="utf-8")

setup(
    name="dual-calendar",
    version="0.3.0",
    description="Gregorian/Jalali dual month calendar for Frappe environments",
    long_description=README,
    long_description_content_type="text/markdown",
    author="OpenAI",
    author_email="support@example.com",
    url="https://github.com/openai/dual-calendar",
    packages=find_packages(exclude=["tests", "tests.*"]),
    include_package_data=True,
    install_requires=[],
    extras_require={
        # Installed by bench inside a Frappe site; the package runs without it.
        "frappe": [
            "frappe>=14.0.0",
        ],
        "test": [
            "pytest>=7.0",
            "jdatetime>=4.1",
        ],
    },
    python_requires=">=3.10",
    classifiers=[
        "Framework :: Frappe",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: Persian",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Topic :: Office/Business",
    ],
)
