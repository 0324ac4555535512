from documents.domain.entities import DocumentKind
from shared.exceptions import InvalidOperationError
from versioning.domain.entities import Version, VersionSearchHit
from versioning.domain.repository import VersionRepository


def display_label(version: Version) -> str:
    if version.is_archived:
        updated = version.created_at.strftime("%Y-%m-%d") if version.created_at else "unknown"
        return f"[Archived - Last Updated: {updated}]"
    return f"[Legacy Version - v{version.version_number}]"


async def search_versions(
    repo: VersionRepository, query: str
) -> dict[DocumentKind, list[VersionSearchHit]]:
    """Case-insensitive match on title, content and description, grouped by document kind."""
    query = query.strip()
    if not query:
        raise InvalidOperationError("Search query must not be empty")

    results: dict[DocumentKind, list[VersionSearchHit]] = {kind: [] for kind in DocumentKind}
    for version in await repo.search(query):
        results[version.document_kind].append(
            VersionSearchHit(version=version, display_label=display_label(version))
        )
    return results
