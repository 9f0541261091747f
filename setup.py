from setuptools import find_packages, setup

setup(
    name="foxauth",
    version="1.0.0",
    packages=find_packages(include=["foxauth", "foxauth.*"]),
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "fastapi",
        "uvicorn",
        "pydantic>=2",
        "cryptography",
        "requests",
        "click",
        "PyJWT",
    ],
    extras_require={
        "test": [
            "pytest",
            "httpx",
        ],
    },
    entry_points={
        "console_scripts": [
            "foxauth=foxauth.cli:cli",
        ],
    },
)
