from setuptools import find_packages, setup

setup(
    name="conslist",
    version="0.1",
    packages=find_packages("src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    license="MIT License",
    description="An immutable singly-linked list with fold-based operations",
    install_requires=[
        "attrs>=22.2.0",
        "pyrsistent>=0.18.0",
        "typing_extensions>=4.7.0",
    ],
    extras_require={"test": ["pytest>=7.0"]},
)
