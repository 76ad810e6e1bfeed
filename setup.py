from setuptools import setup, find_packages

setup(
    name="prmplanning",
    version="0.1.0",
    description="Sampling-based roadmap (PRM) and bidirectional tree (SBL) motion planners",
    packages=find_packages(include=["prmplanning", "prmplanning.*"]),
    install_requires=[
        "numpy>=1.20.0",
        "networkx>=2.6",
        "mujoco>=3.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
