"""Revert a document to an earlier version without losing its current state.

Each attempt snapshots the live document as a checkpoint version, conditioned
on the latest version number read in that attempt, and only then writes the
target payload to the live document. A failed live write leaves the
checkpoint in place. Losing the live write to a concurrent writer is a
ConcurrentModificationError, any other write failure a RevertApplyError
that ``apply_revert`` can retry.
"""

from uuid import UUID

from auth.domain.entities import Actor
from shared.config import settings
from shared.exceptions import (
    ConcurrentModificationError,
    ConflictError,
    InvalidOperationError,
    RevertApplyError,
)
from shared.logging_config import get_logger
from versioning.application.audit import record_action
from versioning.application.store import append_version, get_version
from versioning.domain import policy
from versioning.domain.entities import AuditAction, Version
from versioning.domain.repository import (
    AuditLogRepository,
    LiveContentGateway,
    VersionListCache,
    VersionRepository,
)

logger = get_logger(__name__)


def checkpoint_description(target_version_number: int) -> str:
    return f"Auto-saved before reverting to version {target_version_number}"


async def revert_to(
    repo: VersionRepository,
    live: LiveContentGateway,
    document_id: UUID,
    target_version_number: int,
    actor: Actor,
    expected_latest: int | None = None,
    audit: AuditLogRepository | None = None,
    cache: VersionListCache | None = None,
    max_attempts: int | None = None,
) -> Version:
    """Make the live document match ``target_version_number``.

    Returns the checkpoint version holding the pre-revert live state.
    ``expected_latest`` is the latest version number the caller saw; once the
    history has moved past it the revert fails instead of retrying.
    """
    attempts = max_attempts or settings.REVERT_MAX_ATTEMPTS

    for attempt in range(1, attempts + 1):
        target = await get_version(repo, document_id, target_version_number)
        latest = await repo.get_latest_number(document_id)
        if expected_latest is not None and latest != expected_latest:
            raise ConcurrentModificationError(
                f"Document {document_id} is at version {latest}, "
                f"not {expected_latest}; re-fetch the history and retry"
            )
        policy.ensure_revertible(target, latest)

        current = await live.get_current_content(document_id)
        try:
            checkpoint = await append_version(
                repo,
                document_id,
                current.kind,
                current.payload,
                author_id=actor.id,
                change_description=checkpoint_description(target_version_number),
                expected_latest=latest,
                cache=cache,
            )
        except ConflictError:
            logger.warning(
                "revert_checkpoint_conflict",
                document_id=str(document_id),
                target_version=target_version_number,
                attempt=attempt,
                max_attempts=attempts,
            )
            continue
        break
    else:
        raise ConcurrentModificationError()

    logger.info(
        "revert_checkpoint_saved",
        document_id=str(document_id),
        checkpoint_version=checkpoint.version_number,
        target_version=target_version_number,
    )

    await _apply(live, checkpoint, target, current.revision)

    await record_action(
        audit,
        document_id,
        current.kind,
        AuditAction.REVERTED,
        actor,
        from_version=checkpoint.version_number,
        to_version=target_version_number,
        details={"reverted_to_title": target.title},
    )
    return checkpoint


async def apply_revert(
    repo: VersionRepository,
    live: LiveContentGateway,
    document_id: UUID,
    target_version_number: int,
    actor: Actor,
    audit: AuditLogRepository | None = None,
) -> Version:
    """Retry only the live write of a revert whose checkpoint already exists.

    Allowed while the latest version is the checkpoint taken for this target
    and the live document still holds exactly the checkpointed content, so
    nothing unsaved can be overwritten. No version is appended. Returns the
    applied target version.
    """
    target = await get_version(repo, document_id, target_version_number)
    latest = await repo.get_latest_number(document_id)
    checkpoint = await get_version(repo, document_id, latest)
    current = await live.get_current_content(document_id)

    if (
        checkpoint.change_description != checkpoint_description(target_version_number)
        or checkpoint.payload != current.payload
    ):
        raise InvalidOperationError(
            f"No pending revert of document {document_id} to version "
            f"{target_version_number}; start a new revert instead"
        )

    await _apply(live, checkpoint, target, current.revision)

    await record_action(
        audit,
        document_id,
        current.kind,
        AuditAction.REVERTED,
        actor,
        from_version=checkpoint.version_number,
        to_version=target_version_number,
        details={"reverted_to_title": target.title, "reapplied": True},
    )
    return target


async def _apply(
    live: LiveContentGateway,
    checkpoint: Version,
    target: Version,
    expected_revision: int,
) -> None:
    try:
        await live.apply_content(target.document_id, target.payload, expected_revision)
    except ConflictError as exc:
        # Someone else wrote the live document after it was checkpointed.
        logger.warning(
            "revert_apply_conflict",
            document_id=str(target.document_id),
            target_version=target.version_number,
            checkpoint_version=checkpoint.version_number,
        )
        raise ConcurrentModificationError(
            f"Document {target.document_id} changed while reverting to version "
            f"{target.version_number}; checkpoint v{checkpoint.version_number} was kept, "
            "re-fetch the history and retry"
        ) from exc
    except Exception as exc:
        logger.error(
            "revert_apply_failed",
            document_id=str(target.document_id),
            target_version=target.version_number,
            checkpoint_version=checkpoint.version_number,
            error=str(exc),
        )
        raise RevertApplyError(checkpoint, target.version_number, reason=str(exc)) from exc
