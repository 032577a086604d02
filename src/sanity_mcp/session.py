"""Per-session state shared by the tool handlers of one server."""

from __future__ import annotations

from dataclasses import dataclass

from sanity_mcp.errors import ValidationError

INITIAL_CONTEXT_TOOL = "get_initial_context"


@dataclass
class SessionContext:
    """Tracks whether the agent has loaded the initial context yet.

    With ``required`` off the gate is always open.
    """

    required: bool = True
    initial_context_loaded: bool = False

    def mark_loaded(self) -> None:
        self.initial_context_loaded = True

    def require(self, tool_name: str) -> None:
        """Raise unless ``tool_name`` may run in the current session state."""
        if not self.required or self.initial_context_loaded or tool_name == INITIAL_CONTEXT_TOOL:
            return
        raise ValidationError(
            "Initial context has not been retrieved. "
            f"Please call the {INITIAL_CONTEXT_TOOL} tool first."
        )
