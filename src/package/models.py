"""Data models for resolved packages and the repositories holding them."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional


@dataclass
class Package:
    """A resolved package as read from a manifest, lockfile or install tree.

    ``name`` is the normalized identity used for lookups; ``pretty_name`` is the
    display form. ``requires`` and ``dev_requires`` map normalized dependency
    names to their raw constraint strings, which are never evaluated here.
    """
    name: str
    version: str
    pretty_name: Optional[str] = None
    pretty_version: Optional[str] = None
    requires: Dict[str, str] = field(default_factory=dict)
    dev_requires: Dict[str, str] = field(default_factory=dict)
    license: List[str] = field(default_factory=list)
    source_type: Optional[str] = None
    source_reference: Optional[str] = None

    def __post_init__(self):
        if self.pretty_name is None:
            self.pretty_name = self.name
        if self.pretty_version is None:
            self.pretty_version = self.version

    @property
    def is_dev(self) -> bool:
        """True for branch versions such as ``dev-main`` or ``2.x-dev``."""
        version = self.pretty_version or ""
        return version.startswith("dev-") or version.endswith("-dev")


class Repository:
    """In-memory collection of installed packages.

    Packages are kept in insertion order and duplicates by name are allowed,
    mirroring what an install tree can really contain.
    """

    def __init__(self, packages: Optional[Iterable[Package]] = None):
        self._packages: List[Package] = []
        for pkg in packages or []:
            self.add_package(pkg)

    def add_package(self, package: Package) -> None:
        self._packages.append(package)

    def get_packages(self) -> List[Package]:
        return list(self._packages)

    def __len__(self) -> int:
        return len(self._packages)


@dataclass
class Project:
    """A loaded project: its root package plus the repository of installed packages."""
    root: Package
    repository: Repository
    ecosystem: str
