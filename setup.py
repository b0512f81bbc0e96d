"""Setup configuration for the jigsaw-play package."""

from setuptools import find_packages, setup

setup(
    name="jigsaw-play",
    version="0.1.0",
    packages=find_packages(include=["jigsaw_shapes", "jigsaw_shapes.*", "jigsaw_play", "jigsaw_play.*"]),
    python_requires=">=3.9",
    install_requires=[
        "numpy",
        "pydantic>=2",
        "pydantic-settings>=2",
    ],
    extras_require={
        "dev": [
            "pytest",
            "pytest-cov",
            "pillow",
            "black",
            "flake8",
            "mypy",
            "isort",
        ],
    },
)
