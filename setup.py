"""
gridaxis module
"""

import sys

# Always prefer setuptools over distutils
from setuptools import find_packages, setup

# get version
sys.path.insert(0, "gridaxis")
import version

__version__ = version.version()

install_requires = [
    "numpy>=1.14",
    "pint>=0.8",
    "traitlets>=4.3",
    "xarray>=0.10",
    "lazy-import>=0.2.2",
]

extras_require = {
    "datatype": [
        "netCDF4",
        "h5netcdf",
    ],
    "dev": [
        "pytest>=5.0",
        "pytest-cov>=2.5.1",
        "black",
    ],
}

# set long description to readme
with open("README.MD") as f:
    long_description = f.read()

all_reqs = []
for key, val in extras_require.items():
    if key == "dev":
        continue
    all_reqs += val
extras_require["all"] = all_reqs
extras_require["devall"] = all_reqs + extras_require["dev"]

setup(
    name="gridaxis",
    version=__version__,
    description="Coordinate axes of gridded scientific datasets",
    license="APACHE 2.0",
    classifiers=[
        # How mature is this project? Common values are
        # 3 - Alpha
        # 4 - Beta
        # 5 - Production/Stable
        "Development Status :: 3 - Alpha",
        # Indicate who your project is intended for
        "Intended Audience :: Developers",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
        # Pick your license as you wish (should match "license" above)
        "License :: OSI Approved :: Apache Software License",
        "Programming Language :: Python :: 3",
    ],
    packages=find_packages(include=["gridaxis", "gridaxis.*"]),
    python_requires=">=3.7",
    install_requires=install_requires,
    extras_require=extras_require,
    long_description=long_description,
    long_description_content_type="text/markdown",
)
