from setuptools import setup, find_packages

setup(
    name="rdu",
    version="0.4.0",
    packages=find_packages(include=["rdu", "rdu.*"]),
    description="Fast folder size + preview tool: first-layer disk usage reports as tables or JSON.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0",
        "PyYAML>=6.0",
        "pydantic>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "rdu=rdu.cli:main",
        ]
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
        "Environment :: Console",
    ],
)
