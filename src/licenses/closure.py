"""Package buckets: all installed packages, or the non-dev requirement closure.

A bucket is a plain ``dict`` keyed by package name. Inserting a name that is
already present overwrites the earlier package (last write wins).
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, Iterable, List

from common.logging_utils import extra_context, is_debug_enabled
from package.models import Package, Repository

logger = logging.getLogger(__name__)

Bucket = Dict[str, Package]


def append_packages(packages: Iterable[Package], bucket: Bucket) -> Bucket:
    """Add ``packages`` to ``bucket`` keyed by name and return the bucket."""
    for pkg in packages:
        bucket[pkg.name] = pkg
    return bucket


def collect_all(repository: Repository) -> Bucket:
    """Return every package of ``repository`` keyed by name."""
    return append_packages(repository.get_packages(), {})


def compute_required_closure(repository: Repository, root: Package) -> Bucket:
    """Return the packages transitively required by ``root``.

    Only ``requires`` edges are followed; ``dev_requires`` is never read. The
    walk uses an explicit worklist with the bucket as visited set, so cyclic
    requirements terminate. Required names missing from the repository are
    skipped.
    """
    available = repository.get_packages()
    bucket: Bucket = {}
    pending = deque([root])

    while pending:
        current = pending.popleft()
        requires = set(current.requires)
        if not requires:
            continue
        selected: List[Package] = [
            pkg for pkg in available
            if pkg.name in requires and pkg.name not in bucket
        ]
        append_packages(selected, bucket)
        pending.extend(selected)

        if is_debug_enabled(logger):
            missing = sorted(name for name in requires if not any(p.name == name for p in available))
            logger.debug(
                "Resolved requirements of %s",
                current.pretty_name,
                extra=extra_context(
                    event="closure_step",
                    component="closure",
                    target=current.name,
                    count=len(selected),
                    unresolved=missing or None,
                ),
            )

    logger.info("Required closure of %s holds %d package(s)", root.pretty_name, len(bucket))
    return bucket


def sort_bucket(bucket: Bucket) -> List[Package]:
    """Return the bucket's packages ordered by name."""
    return [bucket[name] for name in sorted(bucket)]
