from os.path import abspath, dirname, exists, join

from setuptools import setup

long_description = None
if exists("README.md"):
    with open("README.md") as file:
        long_description = file.read()


def read_requirements(name):
    with open(abspath(join(dirname(__file__), name))) as file:
        return [line.strip() for line in file if line.strip() and not line.startswith("#")]


install_reqs = read_requirements("requirements.txt")
test_reqs = read_requirements("requirements-dev.txt")

setup(
    name="hlsplaylist",
    version="0.1.0",
    license="MIT",
    zip_safe=False,
    include_package_data=True,
    install_requires=install_reqs,
    extras_require={"test": test_reqs},
    packages=["hlsplaylist"],
    description="Typed HLS media and multi-variant playlist parser",
    long_description=long_description,
    long_description_content_type="text/markdown",
    python_requires=">=3.10",
)
