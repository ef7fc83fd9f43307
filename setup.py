from setuptools import setup, find_packages

setup(
    name="range-order-core",
    version="1.0.0",
    author="Range Order Team",
    description="Rate curve model and vault allocation normalizer for range orders",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    package_data={
        "range_config": ["py.typed"],
        "rate_curve": ["py.typed"],
        "vault_allocation": ["py.typed"],
    },
    install_requires=[
        "pydantic>=2.11.7",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": ["pytest>=8.0"],
    },
    python_requires=">=3.11",
)
