"""Archive and revert eligibility rules.

The latest version is never stored as a flag. It is always the highest
version number currently recorded for the document.
"""

from collections.abc import Iterable

from shared.exceptions import InvalidOperationError
from versioning.domain.entities import HistoryView, Version, VersionHistory


def latest_number(versions: Iterable[Version]) -> int:
    return max((v.version_number for v in versions), default=0)


def is_latest(version: Version, current_latest: int) -> bool:
    return version.version_number == current_latest


def ensure_archivable(version: Version, current_latest: int) -> None:
    if is_latest(version, current_latest):
        raise InvalidOperationError(
            f"Version {version.version_number} is the latest version and cannot be archived"
        )


def ensure_revertible(target: Version, current_latest: int) -> None:
    if is_latest(target, current_latest):
        raise InvalidOperationError(
            f"Version {target.version_number} is already the latest version"
        )


def split_history(versions: list[Version]) -> VersionHistory:
    return VersionHistory(
        active=[v for v in versions if not v.is_archived],
        archived=[v for v in versions if v.is_archived],
    )


def filter_view(versions: list[Version], view: HistoryView) -> list[Version]:
    if view == HistoryView.ALL:
        return versions
    history = split_history(versions)
    return history.active if view == HistoryView.ACTIVE else history.archived
