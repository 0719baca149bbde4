from setuptools import setup, find_packages

setup(
    name="callclock",
    version="0.1.0",
    description="callclock: call-graph timing by instrumenting every function reachable from a namespace",
    author="Joel Jani",
    packages=find_packages(exclude=("tests", "tests.*")),  # finds callclock/
    install_requires=[
        # standard library only at runtime
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "callclock=callclock.cli:main",  # CLI entry point
        ],
    },
    include_package_data=True,
    python_requires=">=3.10",
)
