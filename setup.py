from setuptools import setup, find_packages


PACKAGE_NAME = "robomap"
PACKAGE_VERSION = "1.0.0"
PACKAGE_AUTHORS = "RoboMap Studio contributors"
PACKAGE_DESCRIPTION = """Rasterize map editor scenes (circles, rectangles, polygons)
into occupancy grids for robot navigation stacks (PGM + YAML + planner NPY)
"""
INSTALL_REQUIREMENTS = [
    "numpy",
    "loguru",
    "shapely",
    "pyyaml",
]
EXTRAS_REQUIRE = {
    "test": ["pytest"],
}


setup(
    name=PACKAGE_NAME,
    version=PACKAGE_VERSION,
    description=PACKAGE_DESCRIPTION,
    author=PACKAGE_AUTHORS,
    license="GPLv3",
    packages=find_packages(include=["robomap", "robomap.*"]),
    install_requires=INSTALL_REQUIREMENTS,
    extras_require=EXTRAS_REQUIRE,
    entry_points={"console_scripts": ["robomap=robomap.cli:main"]},
    zip_safe=False,
    python_requires=">=3.10",
)
