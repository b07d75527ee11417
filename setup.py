from setuptools import setup, find_packages

setup(
    name="regulation-explorer",
    version="0.1.0",
    description="Loads, filters and pages through an ESG regulations export",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    py_modules=["cli"],
    package_data={"config": ["*.yaml"]},
    python_requires=">=3.10",
    install_requires=[
        "pydantic>=2.0",
        "pyyaml>=6.0",
        "structlog>=23.0",
        "python-dotenv>=1.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-cov>=4.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "regulation-explorer=cli:main",
        ],
    },
)
