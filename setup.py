from setuptools import setup, find_packages

setup(
    name="mychain-core",
    version="0.1.0",
    packages=find_packages(include=["mychain_core", "mychain_core.*"]),
    package_data={"mychain_core.config": ["networks.yaml"]},
    install_requires=[
        # Key derivation (BIP39 / BIP44, bech32 addresses)
        "bip_utils>=2.9.3",
        # HTTP client for node RPC and REST
        "aiohttp>=3.8.4",
        # Data validation and configuration
        "pydantic>=2.0.0",
        "pydantic-settings>=2.0.0",
        "python-dotenv>=1.0.0",
        "PyYAML>=6.0",
        # CLI and UI
        "click>=8.1.3",
        "rich>=13.0.0",
        # Logging
        "coloredlogs>=15.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
            "hypothesis>=6.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "mychain=mychain_core.cli.main:main",
        ],
    },
    author="MyChain",
    description="Client core for MyChain: connections, identities, transactions and queries",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.9",
)
