"""Human readable version strings for packages."""

from .models import Package

VCS_SOURCE_TYPES = ("git", "hg")
_FULL_HASH_LENGTH = 40
_SHORT_HASH_LENGTH = 7


def format_version(package: Package, truncate: bool = True) -> str:
    """Return the display version of ``package``.

    Dev versions installed from a git or hg checkout get the source reference
    appended; full 40 character hashes are shortened to 7 when ``truncate``.
    """
    pretty = package.pretty_version or package.version
    if not package.is_dev or package.source_type not in VCS_SOURCE_TYPES:
        return pretty
    reference = package.source_reference
    if not reference:
        return pretty
    if truncate and len(reference) == _FULL_HASH_LENGTH:
        return f"{pretty} {reference[:_SHORT_HASH_LENGTH]}"
    return f"{pretty} {reference}"
