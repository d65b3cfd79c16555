# setup.py
from setuptools import setup, find_packages

setup(
    name="painter3d",
    version="0.1.0",
    description="Painter3D – CPU painter's-algorithm visibility pipeline",
    packages=find_packages(include=["painter3d", "painter3d.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "Pillow>=9.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
)
