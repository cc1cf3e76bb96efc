from setuptools import setup, find_packages

setup(
    name="topomap",
    version="0.1.0",
    description="Topological waypoint maps with frontier and object search for exploring robots",
    license="MIT",
    package_dir={"": "src"},
    packages=find_packages(where="src", include=["topomap", "topomap.*"]),
    python_requires=">=3.10",
    install_requires=[
        "numpy",
        "matplotlib",
        "rich",
        "rich-click",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "topomap=topomap.cli:main",
        ],
    },
    zip_safe=False,
)
