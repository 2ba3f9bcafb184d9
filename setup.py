from pathlib import Path

from setuptools import find_packages, setup

NAME = "swissbill"
SRC_DIR = Path("src")

README = Path("SPEC_FULL.md")
LONG_DESCRIPTION = README.read_text(encoding="utf-8") if README.exists() else ""

setup(
    name=NAME,
    version="0.1.0",
    description="Swiss invoice VAT breakdown, RF creditor references and QR payment-slip data",
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
    package_dir={"": str(SRC_DIR)},
    packages=find_packages(where=str(SRC_DIR), include=["swissbill", "swissbill.*"]),
    install_requires=[
        "lxml",
        "openpyxl",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "swissbill=swissbill.cli:main",
        ],
    },
)
