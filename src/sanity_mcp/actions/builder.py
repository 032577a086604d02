"""Build action payloads from already-resolved identifiers. No I/O."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from sanity_mcp import ids
from sanity_mcp.dates import parse_date_string, parse_iso
from sanity_mcp.errors import DateParseError, InvalidOperation, ValidationError
from sanity_mcp.models.actions import (
    DeleteAction,
    PublishAction,
    ReleaseActionKind,
    ReleaseCreateAction,
    ReleaseEditAction,
    ReleaseScheduleAction,
    ReleaseStateAction,
    UnpublishAction,
    VersionCreateAction,
    VersionDiscardAction,
    VersionReplaceAction,
    VersionUnpublishAction,
)
from sanity_mcp.models.release import ReleaseMetadata, ReleaseType

if TYPE_CHECKING:
    from sanity_mcp.dates import DateParser
    from sanity_mcp.models.actions import Document


def build_version_create(
    published_id: str,
    document: Document,
    release_id: str,
) -> VersionCreateAction:
    """Snapshot ``document`` into ``release_id`` as a new version."""
    source_id = document.get("_id") or published_id
    if ids.parse(source_id).is_version or ids.parse(published_id).is_version:
        raise InvalidOperation(
            f"Document '{source_id}' is already a release version and cannot be versioned again"
        )

    base_id = ids.resolve_published_id(published_id)
    version_id = ids.to_version_id(base_id, ids.normalize_release_id(release_id))
    return VersionCreateAction(
        published_id=base_id,
        document={**document, "_id": version_id},
    )


def build_version_replace(document: Document) -> VersionReplaceAction:
    version_id = document.get("_id")
    if not version_id:
        raise ValidationError("Replacement document must include an _id")
    if not ids.parse(version_id).is_version:
        raise InvalidOperation(f"'{version_id}' is not a version id; only versions can be replaced")
    return VersionReplaceAction(document=dict(document))


def build_version_discard(version_id: str, purge: bool | None = None) -> VersionDiscardAction:
    """Discard a version (or draft) copy without touching the published document."""
    identifier = ids.parse(version_id)
    if identifier.category is ids.DocumentCategory.PUBLISHED:
        raise InvalidOperation(
            f"'{version_id}' is a published id; only version or draft copies can be discarded"
        )
    return VersionDiscardAction(version_id=identifier.id, purge=purge)


def build_version_unpublish(version_id: str, published_id: str) -> VersionUnpublishAction:
    """Mark a document to be unpublished when the version's release is published."""
    identifier = ids.parse(version_id)
    if not identifier.is_version:
        raise InvalidOperation(f"'{version_id}' must be a version id (versions.<releaseId>.<id>)")
    base_id = ids.resolve_published_id(published_id)
    if identifier.base_id != base_id:
        raise InvalidOperation(
            f"Version '{version_id}' does not belong to published document '{base_id}'"
        )
    return VersionUnpublishAction(version_id=identifier.id, published_id=base_id)


def build_publish(draft_id: str, published_id: str) -> PublishAction:
    draft, published = _draft_and_published(draft_id, published_id)
    return PublishAction(draft_id=draft, published_id=published)


def build_unpublish(draft_id: str, published_id: str) -> UnpublishAction:
    draft, published = _draft_and_published(draft_id, published_id)
    return UnpublishAction(draft_id=draft, published_id=published)


def build_delete(
    published_id: str,
    include_drafts: list[str] | None = None,
    purge: bool | None = None,
) -> DeleteAction:
    base_id = ids.resolve_published_id(published_id)
    drafts = include_drafts if include_drafts is not None else [ids.to_draft_id(base_id)]
    return DeleteAction(published_id=base_id, include_drafts=drafts, purge=purge)


def build_release_create(
    release_id: str,
    metadata: ReleaseMetadata,
    *,
    parse_date: DateParser = parse_date_string,
) -> ReleaseCreateAction:
    """Create a release; a scheduled release must carry ``intended_publish_at``."""
    if not metadata.title:
        raise ValidationError("A release title is required")
    if metadata.release_type is None:
        raise ValidationError("A release type is required (asap, undecided or scheduled)")

    intended = metadata.intended_publish_at
    if intended:
        intended = _resolve_date(intended, parse_date)
    if metadata.release_type is ReleaseType.SCHEDULED and not intended:
        raise ValidationError("intendedPublishAt is required when releaseType is 'scheduled'")

    return ReleaseCreateAction(
        release_id=ids.normalize_release_id(release_id),
        metadata=metadata.model_copy(update={"intended_publish_at": intended}),
    )


def build_release_edit(
    release_id: str,
    changes: ReleaseMetadata,
    *,
    parse_date: DateParser = parse_date_string,
) -> ReleaseEditAction:
    """Patch release metadata with only the fields that were provided."""
    updates: dict[str, Any] = changes.to_wire()
    if not updates:
        raise ValidationError("No changes provided for the release metadata")
    if "intendedPublishAt" in updates:
        updates["intendedPublishAt"] = _resolve_date(updates["intendedPublishAt"], parse_date)
    return ReleaseEditAction(
        release_id=ids.normalize_release_id(release_id),
        patch={"set": {"metadata": updates}},
    )


def build_release_action(
    kind: ReleaseActionKind | str,
    release_id: str,
    *,
    publish_at: str | None = None,
    parse_date: DateParser = parse_date_string,
    now: datetime | None = None,
) -> ReleaseScheduleAction | ReleaseStateAction:
    """Build one of archive/unarchive/schedule/unschedule/publish/delete."""
    try:
        kind = ReleaseActionKind(kind)
    except ValueError:
        allowed = ", ".join(k.value for k in ReleaseActionKind)
        raise ValidationError(
            f"Unknown release action '{kind}' (expected one of {allowed})"
        ) from None

    release_id = ids.normalize_release_id(release_id)
    if kind is not ReleaseActionKind.SCHEDULE:
        return ReleaseStateAction(action_type=kind.action_type, release_id=release_id)

    if not publish_at:
        raise ValidationError("A publish time is required to schedule a release")
    resolved = _resolve_date(publish_at, parse_date)
    when = parse_iso(resolved)
    if when is None:
        raise DateParseError(f"Date collaborator returned a non-ISO value '{resolved}'")
    if when <= (now or datetime.now(UTC)):
        raise ValidationError(f"Publish time {resolved} is in the past")
    return ReleaseScheduleAction(release_id=release_id, publish_at=resolved)


def _resolve_date(value: str, parse_date: DateParser) -> str:
    resolved = parse_date(value)
    if not resolved:
        raise DateParseError(f"Could not understand the date '{value}'")
    return resolved


def _draft_and_published(draft_id: str, published_id: str) -> tuple[str, str]:
    base_id = ids.resolve_published_id(published_id)
    draft = ids.parse(draft_id)
    if not draft.is_draft:
        raise InvalidOperation(f"'{draft_id}' is not a draft id (drafts.<id>)")
    if draft.base_id != base_id:
        raise InvalidOperation(f"Draft '{draft_id}' does not belong to document '{base_id}'")
    return draft.id, base_id
