from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

with open("requirements.txt", "r", encoding="utf-8") as fh:
    requirements = fh.read().splitlines()

setup(
    name="grapho_surface",
    version="0.1.0",
    author="UFABC",
    author_email="author@ufabc.edu.br",
    description="Interactive 3D surface graphs of functions z = f(x, y)",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/ufabc/grapho_surface",
    packages=find_packages(exclude=["tests", "tests.*", "examples", "examples.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Visualization",
    ],
    python_requires=">=3.8",
    install_requires=requirements,
    extras_require={
        "interactive": ["plotly>=5.0"],
        "test": ["pytest>=7.0", "plotly>=5.0"],
    },
)
