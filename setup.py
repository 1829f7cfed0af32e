"""Set-up file for porefluid for installations usins ``pip install .``"""
from setuptools import find_packages, setup


with open("requirements.txt") as f:
    required = f.read().splitlines()

with open("requirements-dev.txt") as f:
    required_dev = f.read().splitlines()


setup(
    name="porefluid",
    version="0.1.0",
    license="GPL",
    keywords=["porous media simulation multiphase multicomponent fluid state"],
    install_requires=required,
    extras_require={"test": required_dev},
    description="Fluid state contract for multiphase multicomponent porous media flow",
    platforms=["Linux", "Windows", "Mac OS-X"],
    package_data={
        "porefluid": ["py.typed"],
    },
    packages=find_packages("src"),
    package_dir={"": "src"},
    zip_safe=False,
)
