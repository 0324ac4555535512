from difflib import SequenceMatcher
from uuid import UUID

from versioning.application.store import get_version
from versioning.domain.entities import DiffOp, DiffSegment, VersionComparison
from versioning.domain.repository import VersionRepository


def word_diff(old: str | None, new: str | None) -> list[DiffSegment]:
    """Word-level diff of two texts, old to new."""
    old_words = (old or "").split()
    new_words = (new or "").split()
    segments: list[DiffSegment] = []

    matcher = SequenceMatcher(a=old_words, b=new_words, autojunk=False)
    for tag, i1, i2, j1, j2 in matcher.get_opcodes():
        if tag == "equal":
            segments.append(DiffSegment(DiffOp.UNCHANGED, " ".join(old_words[i1:i2])))
            continue
        if i2 > i1:
            segments.append(DiffSegment(DiffOp.REMOVED, " ".join(old_words[i1:i2])))
        if j2 > j1:
            segments.append(DiffSegment(DiffOp.ADDED, " ".join(new_words[j1:j2])))
    return segments


async def compare_versions(
    repo: VersionRepository,
    document_id: UUID,
    version_a: int,
    version_b: int,
) -> VersionComparison:
    """Compare two versions, always expressed old to new."""
    lower, higher = sorted((version_a, version_b))
    older = await get_version(repo, document_id, lower)
    newer = await get_version(repo, document_id, higher)

    return VersionComparison(
        older=older,
        newer=newer,
        title_changed=older.title != newer.title,
        content_changed=older.content != newer.content,
        description_changed=older.description != newer.description,
        status_changed=older.status != newer.status,
        content_diff=word_diff(older.content, newer.content),
    )
