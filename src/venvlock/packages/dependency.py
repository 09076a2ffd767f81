from __future__ import annotations

import dataclasses
import re

from urllib.parse import urlsplit
from urllib.parse import urlunsplit

from packaging.requirements import InvalidRequirement
from packaging.requirements import Requirement
from packaging.utils import canonicalize_name
from packaging.version import InvalidVersion
from packaging.version import Version

from venvlock.exceptions import MalformedDependencyLine


# Debian's pip reports this distribution in `pip freeze` although it cannot
# be installed from an index.
IGNORED_DISTRIBUTIONS = frozenset({canonicalize_name("pkg-resources")})

# pip freeze output for projects installed from a VCS checkout without
# PEP 610 metadata. Not a PEP 508 requirement.
_EGG_RE = re.compile(
    r"^(?P<editable>(?:-e|--editable)\s+)?"
    r"(?P<ref>[^\s;]+#egg=(?P<name>[A-Za-z0-9][A-Za-z0-9._-]*)[^\s;]*)"
    r"(?:\s+;\s*(?P<marker>\S.*))?$"
)


def is_pep440_version(version: str) -> bool:
    try:
        Version(version)
    except InvalidVersion:
        return False

    return True


@dataclasses.dataclass(frozen=True)
class DependencyRecord:
    """
    A single pinned dependency, as found in `pip freeze` output or in a lock
    file.

    A dependency is either pinned to a version of the package index or to a
    source reference (a VCS or archive URL). Versions that are not valid
    PEP 440 versions are pinned with `===`.
    """

    name: str
    version: str | None = None
    source_ref: str | None = None
    marker: str | None = None
    editable: bool = False
    arbitrary_equality: bool = False

    def __post_init__(self) -> None:
        if (self.version is None) == (self.source_ref is None):
            raise ValueError(
                f"{self.name} must be pinned either to a version or to a source reference"
            )

    @property
    def is_source_pinned(self) -> bool:
        return self.source_ref is not None

    def with_version(self, version: str) -> DependencyRecord:
        return dataclasses.replace(
            self,
            version=version,
            source_ref=None,
            editable=False,
            arbitrary_equality=not is_pep440_version(version),
        )

    def with_revision(self, revision: str) -> DependencyRecord:
        assert self.source_ref is not None

        return dataclasses.replace(
            self, source_ref=_replace_revision(self.source_ref, revision)
        )

    def with_marker(self, marker: str | None) -> DependencyRecord:
        return dataclasses.replace(self, marker=marker)

    def to_line(self) -> str:
        if self.source_ref is None:
            operator = "===" if self.arbitrary_equality else "=="
            line = f"{self.name}{operator}{self.version}"
        elif "#egg=" in self.source_ref:
            line = f"-e {self.source_ref}" if self.editable else self.source_ref
        else:
            line = f"{self.name} @ {self.source_ref}"

        if self.marker:
            line += f" ; {self.marker}"

        return line

    def __str__(self) -> str:
        return self.to_line()


def parse_freeze_line(line: str) -> DependencyRecord:
    """
    Parse one line of `pip freeze` output, or one dependency line of a lock
    file.

    Accepted forms are `name==version`, `name===version`, `name @ reference`
    and `[-e ]vcs+url#egg=name`, each optionally followed by `; <marker>`.
    """
    stripped = line.strip()

    match = _EGG_RE.match(stripped)
    if match:
        return DependencyRecord(
            name=match.group("name"),
            source_ref=match.group("ref"),
            marker=match.group("marker"),
            editable=match.group("editable") is not None,
        )

    try:
        requirement = Requirement(stripped)
    except InvalidRequirement as e:
        raise MalformedDependencyLine(line) from e

    marker = str(requirement.marker) if requirement.marker is not None else None

    if requirement.url is not None:
        return DependencyRecord(
            name=requirement.name, source_ref=requirement.url, marker=marker
        )

    specifiers = list(requirement.specifier)
    if len(specifiers) != 1 or specifiers[0].operator not in ("==", "==="):
        raise MalformedDependencyLine(line)

    return DependencyRecord(
        name=requirement.name,
        version=specifiers[0].version,
        marker=marker,
        arbitrary_equality=specifiers[0].operator == "===",
    )


def parse_freeze_output(output: str) -> list[DependencyRecord]:
    records = []
    for line in output.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        records.append(parse_freeze_line(line))

    return [
        record
        for record in records
        if canonicalize_name(record.name) not in IGNORED_DISTRIBUTIONS
    ]


def _replace_revision(reference: str, revision: str) -> str:
    url, sep, fragment = reference.partition("#")
    scheme, netloc, path, query, _ = urlsplit(url)

    if "@" in path:
        path = path.rsplit("@", 1)[0]
    path = f"{path}@{revision}"

    return urlunsplit((scheme, netloc, path, query, "")) + sep + fragment
