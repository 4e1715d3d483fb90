from setuptools import setup, find_packages

# Minimal setup.py for editable installs (pip install -e .)
setup(
    name="detsched",
    version="0.1.0",
    description="L-ensemble kernels for determinantal scheduling of wireless TX/RX pairs",
    packages=find_packages(exclude=("tests", "configs", "runs", "docs")),
    python_requires=">=3.10",
    install_requires=[
        "torch",
        "numpy",
        "PyYAML",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
