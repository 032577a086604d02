"""Action construction and dispatch for store mutations."""

from sanity_mcp.actions.builder import (
    build_delete,
    build_publish,
    build_release_action,
    build_release_create,
    build_release_edit,
    build_unpublish,
    build_version_create,
    build_version_discard,
    build_version_replace,
    build_version_unpublish,
)
from sanity_mcp.actions.dispatcher import ActionDispatcher

__all__ = [
    "ActionDispatcher",
    "build_delete",
    "build_publish",
    "build_release_action",
    "build_release_create",
    "build_release_edit",
    "build_unpublish",
    "build_version_create",
    "build_version_discard",
    "build_version_replace",
    "build_version_unpublish",
]
