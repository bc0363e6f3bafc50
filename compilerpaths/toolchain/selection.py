"""
Version selection policy.

Latest-by-default, exact-match-on-request. Both selectors are pure functions
over a collection of install records, so they do not depend on the order the
catalog returns.
"""

import logging
from typing import Optional, Sequence, Type

from ..core.exceptions import InstallNotFoundError, NotFoundError
from ..core.version import Version
from .catalog import InstallT

logger = logging.getLogger(__name__)


def select_latest(records: Sequence[InstallT], subject: str) -> InstallT:
    """
    Pick the record with the highest version.

    Args:
        records: Install records in any order
        subject: Catalog name used in the empty-catalog error

    Returns:
        Newest record; the first one seen wins a tie

    Raises:
        NotFoundError: If records is empty
    """
    if not records:
        raise NotFoundError(subject)
    return max(records, key=lambda record: record.version)


def select_exact(
    records: Sequence[InstallT],
    version: Version,
    subject: str,
    not_found: Type[InstallNotFoundError],
    requested: Optional[str] = None,
) -> InstallT:
    """
    Pick the record whose version equals the requested one.

    Records are scanned in the order given and each candidate is logged.

    Args:
        records: Install records, normally newest first
        version: Requested version
        subject: Catalog name used for logging
        not_found: Exception type raised when nothing matches
        requested: Version string as supplied by the caller

    Returns:
        Matching record

    Raises:
        InstallNotFoundError: Subclass given by not_found
    """
    for candidate in records:
        logger.debug(f"Consider {subject} version: {candidate.version}")
        if candidate.version == version:
            return candidate

    raise not_found(requested if requested is not None else str(version))


def select(
    records: Sequence[InstallT],
    requested: Optional[str],
    subject: str,
    not_found: Type[InstallNotFoundError],
) -> InstallT:
    """
    Apply the selection policy to one catalog collection.

    An absent or empty version string selects the latest record, anything
    else must parse as a version and match exactly.

    Raises:
        InvalidVersionFormatError: If requested is not a dotted-integer version
        InstallNotFoundError: If requested is not in the collection
        NotFoundError: If the collection is empty
    """
    if not requested:
        chosen = select_latest(records, subject)
        logger.debug(f"No {subject} version requested, using latest {chosen.version}")
        return chosen

    version = Version.parse(requested, subject)
    return select_exact(records, version, subject, not_found, requested)


__all__ = ["select_latest", "select_exact", "select"]
