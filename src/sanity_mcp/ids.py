"""Document identifier model — published, draft and release-version forms.

A logical document has one base id. Its concrete forms are:

* published: ``<baseId>``
* draft: ``drafts.<baseId>``
* version: ``versions.<releaseId>.<baseId>``

Parsing is positional: for versions the second segment is the release id and
everything after it is the base id. Release ids are therefore never allowed
to contain dots.
"""

from __future__ import annotations

import re
import secrets
import string
from enum import StrEnum
from typing import Literal, NamedTuple

from sanity_mcp.errors import InvalidIdentifier

DRAFTS_PREFIX = "drafts"
VERSIONS_PREFIX = "versions"
RELEASES_PATH = "_.releases"

MAX_ID_LENGTH = 128
_RELEASE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")
_ID_ALPHABET = string.ascii_letters + string.digits


class DocumentCategory(StrEnum):
    PUBLISHED = "published"
    DRAFT = "drafts"
    VERSION = "versions"


class DocumentIdentifier(NamedTuple):
    category: DocumentCategory
    base_id: str
    release_id: str | None = None

    @property
    def id(self) -> str:
        return format_id(self.category, self.base_id, self.release_id)

    @property
    def published_id(self) -> str:
        return self.base_id

    @property
    def draft_id(self) -> str:
        return to_draft_id(self.base_id)

    @property
    def is_version(self) -> bool:
        return self.category is DocumentCategory.VERSION

    @property
    def is_draft(self) -> bool:
        return self.category is DocumentCategory.DRAFT


def parse(document_id: str) -> DocumentIdentifier:
    """Split a document id into ``(category, base_id, release_id)``."""
    if not document_id:
        raise InvalidIdentifier("Document id must not be empty")

    parts = document_id.split(".")
    if len(parts) == 1:
        return DocumentIdentifier(DocumentCategory.PUBLISHED, document_id)

    head = parts[0]
    if head == DRAFTS_PREFIX:
        base_id = ".".join(parts[1:])
        if not base_id:
            raise InvalidIdentifier(f"Draft id '{document_id}' has no base id")
        _check_unprefixed(document_id, base_id)
        return DocumentIdentifier(DocumentCategory.DRAFT, base_id)

    if head == VERSIONS_PREFIX:
        if len(parts) < 3 or not parts[1]:  # noqa: PLR2004
            raise InvalidIdentifier(
                f"Version id '{document_id}' must look like versions.<releaseId>.<documentId>"
            )
        base_id = ".".join(parts[2:])
        if not base_id:
            raise InvalidIdentifier(f"Version id '{document_id}' has no base id")
        _check_release_id(parts[1])
        _check_unprefixed(document_id, base_id)
        return DocumentIdentifier(DocumentCategory.VERSION, base_id, parts[1])

    # Dotted ids without a known prefix (e.g. system documents) are published ids.
    return DocumentIdentifier(DocumentCategory.PUBLISHED, document_id)


def format_id(
    category: DocumentCategory,
    base_id: str,
    release_id: str | None = None,
) -> str:
    """Inverse of :func:`parse`."""
    if not base_id:
        raise InvalidIdentifier("Base id must not be empty")
    if parse(base_id).category is not DocumentCategory.PUBLISHED:
        raise InvalidIdentifier(f"Base id '{base_id}' already carries a category prefix")

    if category is DocumentCategory.PUBLISHED:
        return base_id
    if category is DocumentCategory.DRAFT:
        return f"{DRAFTS_PREFIX}.{base_id}"
    if release_id is None:
        raise InvalidIdentifier("A release id is required for version ids")
    _check_release_id(release_id)
    return f"{VERSIONS_PREFIX}.{release_id}.{base_id}"


def to_version_id(base_id: str, release_id: str) -> str:
    return format_id(DocumentCategory.VERSION, base_id, release_id)


def to_draft_id(base_id: str) -> str:
    return format_id(DocumentCategory.DRAFT, base_id)


def resolve_published_id(document_id: str) -> str:
    """Strip any draft or version prefix. Idempotent."""
    return parse(document_id).base_id


def resolve_for_action(
    document_id: str,
    release_id: str | Literal[False] | None = None,
) -> DocumentIdentifier:
    """Pick the concrete identifier an action should target.

    ``release_id=False`` forces the published form. A version id is
    self-describing, so any explicit release id is ignored for it.
    """
    identifier = parse(document_id)
    if release_id is False:
        return DocumentIdentifier(DocumentCategory.PUBLISHED, identifier.base_id)
    if identifier.is_version:
        return identifier
    if release_id:
        return DocumentIdentifier(
            DocumentCategory.VERSION,
            identifier.base_id,
            normalize_release_id(release_id),
        )
    return DocumentIdentifier(DocumentCategory.PUBLISHED, identifier.base_id)


def normalize_release_id(value: str) -> str:
    """Reduce ``_.releases.rABC`` style references to the bare release id."""
    candidate = value.strip().split(".")[-1] if value else ""
    _check_release_id(candidate)
    return candidate


def release_document_id(release_id: str) -> str:
    """Id of the system document that stores a release."""
    return f"{RELEASES_PATH}.{normalize_release_id(release_id)}"


def generate_release_id(length: int = 8, prefix: str = "r") -> str:
    """Random alphanumeric id, ``r`` + 8 characters by default."""
    available = MAX_ID_LENGTH - len(prefix)
    size = min(max(1, length), available)
    return prefix + "".join(secrets.choice(_ID_ALPHABET) for _ in range(size))


def _check_release_id(release_id: str) -> None:
    if not release_id or not _RELEASE_ID_PATTERN.match(release_id):
        raise InvalidIdentifier(
            f"Release id '{release_id}' may only contain letters, digits, '-' and '_'"
        )


def _check_unprefixed(document_id: str, base_id: str) -> None:
    # A base id never carries a prefix of its own.
    if parse(base_id).category is not DocumentCategory.PUBLISHED:
        raise InvalidIdentifier(f"Document id '{document_id}' carries more than one prefix")
