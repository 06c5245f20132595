import os
from importlib.util import module_from_spec, spec_from_file_location

from setuptools import find_packages, setup


module_name = "aiojsonrpc"


def load_version(path):
    spec = spec_from_file_location("version", path)
    module = module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.version_info


try:
    version_info = load_version(os.path.join(module_name, "version.py"))
except FileNotFoundError:
    version_info = (0, 0, 0)


__version__ = "{}.{}.{}".format(*version_info)


def load_requirements(fname):
    """ load requirements from a pip requirements file """
    with open(fname) as f:
        line_iter = (line.strip() for line in f.readlines())
        return [line for line in line_iter if line and line[0] != "#"]


setup(
    name=module_name,
    version=__version__,
    license="MIT",
    description="aiojsonrpc - JSON-RPC 2.0 requester and responder "
                "over any message transport for asyncio",
    long_description=open("README.rst").read(),
    platforms="all",
    classifiers=[
        "Framework :: AsyncIO",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: MacOS",
        "Operating System :: POSIX",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: Implementation :: CPython",
        "Topic :: Software Development :: Libraries",
    ],
    packages=find_packages(exclude=["tests*"]),
    package_data={
        "aiojsonrpc": ["py.typed"],
    },
    python_requires=">=3.8",
    install_requires=load_requirements("requirements.txt"),
    extras_require={
        "develop": load_requirements("requirements.dev.txt"),
    },
)
