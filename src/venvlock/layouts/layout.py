from __future__ import annotations

from typing import TYPE_CHECKING

from packaging.utils import canonicalize_name

from venvlock.exceptions import SetupDescriptorExists


if TYPE_CHECKING:
    from pathlib import Path


SETUP_PY_TEMPLATE = '''\
from setuptools import find_packages
from setuptools import setup


setup(
    name="{name}",
    version="{version}",
    description="",
    author="{author}",
    packages=find_packages(),
    install_requires=[
        # Put your dependencies here
    ],
    extras_require={{
        # Dependencies needed to run the project in production
        "prod": [],
        # Dependencies needed for development
        "dev": [
            "pytest",
        ],
    }},
)
'''


class Layout:
    def __init__(
        self, project: str, version: str = "0.1.0", author: str | None = None
    ) -> None:
        self._project = canonicalize_name(project)
        self._version = version
        self._author = author or "Your Name"

    @property
    def project(self) -> str:
        return self._project

    def generate_setup_py(self) -> str:
        return SETUP_PY_TEMPLATE.format(
            name=self._project, version=self._version, author=self._author
        )

    def create(self, setup_py: Path) -> None:
        if setup_py.exists():
            raise SetupDescriptorExists(setup_py)

        setup_py.write_text(self.generate_setup_py(), encoding="utf-8")
