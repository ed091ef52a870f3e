[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "gridsolvers"
version = "0.1.0"
description = "Small structured-grid solvers: 2D Euler flow past a cylinder, conjugate gradient on a CSR Poisson matrix, and Jacobi relaxation of the Laplace equation."
requires-python = ">=3.10"
keywords = ["cfd", "euler", "lax-friedrichs", "conjugate-gradient", "jacobi", "laplace", "poisson", "csr"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Science/Research",
    "Intended Audience :: Education",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Physics",
    "Topic :: Scientific/Engineering :: Mathematics",
]
dependencies = [
    "numpy",
]

[project.optional-dependencies]
test = [
    "pytest",
    "numpy",
]

[project.scripts]
gridsolvers-euler = "gridsolvers.euler:main"
gridsolvers-cg = "gridsolvers.cg:main"
gridsolvers-laplace = "gridsolvers.laplace:main"

[tool.hatch.build.targets.wheel]
packages = ["gridsolvers"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
