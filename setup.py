"""
Setup configuration for the project.
Allows the package to be installed in development mode.
"""

from setuptools import setup, find_packages

setup(
    name="energy-invoice-extractor",
    version="1.0.0",
    description="Extract address, Zählpunktnummer and current kWh from OCR text of Austrian electricity invoices",
    packages=find_packages(exclude=["tests", "tests.*"]),
    py_modules=["main"],
    install_requires=[
        "pandas>=2.0.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "energy-invoice-extractor=main:main",
        ],
    },
    python_requires=">=3.8",
)
