from setuptools import setup, find_packages

setup(
    name="storefront_search",
    version="0.1",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"app": ["data/*.json"]},
    install_requires=[
        "regex",
        "uvicorn",
        "fastapi",
        "pydantic>=2",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx>=0.27.0",
        ],
    },
    python_requires='>=3.11',
)
