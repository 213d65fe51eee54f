from setuptools import setup, find_packages

setup(
    name="mkdocs-hdrdoc",
    version="0.3.0",
    description="C header API reference pages for MkDocs and MDX sites",
    keywords="mkdocs c header doxygen mdx documentation python",
    packages=find_packages(exclude=["tests"]),
    python_requires=">=3.9",
    install_requires=[
        "mkdocs>=1.6",
    ],
    extras_require={
        "test": ["pytest"],
    },
    classifiers = [
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Documentation",
        "Topic :: Software Development :: Documentation",
        "Framework :: MkDocs",
    ],
    entry_points={
        "mkdocs.plugins": [
            "hdrdoc = mkdocs_hdrdoc.plugin:HdrdocPlugin",
        ],
        "console_scripts": [
            "hdrdoc = mkdocs_hdrdoc.extract:main",
        ],
    },
)
