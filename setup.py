from setuptools import setup, find_namespace_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="CheckTree",
    version="0.1.0",
    author="Alex Prochot",
    description="Selection, expansion, and search-filter state engine for checkable trees",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/prochot/CheckTree",
    packages=find_namespace_packages(include=["CheckTree", "CheckTree.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.12",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Topic :: Software Development :: Libraries :: Python Modules",
        "Intended Audience :: Developers",
    ],
    python_requires=">=3.11",
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "checktree=CheckTree.main:main",
        ],
    },
)
