from setuptools import setup, find_packages

setup(
    name="gridgames",
    version="0.1.0",
    packages=find_packages(include=["gridgames", "gridgames.*"]),
    py_modules=["run"],
    install_requires=[
        "numpy",
        "gymnasium",  # Environment interface for the tic-tac-toe opponent
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["gridgames=gridgames.interfaces.cli:main"],
    },
)
