"""
Shared status models for the invoice editor.

These describe the editor's transient state rather than the invoice itself:
where the debounced save currently stands, and which text-assist requests
are still outstanding.
"""

from dataclasses import dataclass, field
from enum import Enum


class SaveStatus(str, Enum):
    """
    State of the persisted copy relative to the in-memory record.

    Transitions are MODIFIED -> SAVING -> SAVED on a successful write; any
    edit moves back to MODIFIED from every state.
    """

    MODIFIED = "modified"
    SAVING = "saving"
    SAVED = "saved"

    @property
    def label(self) -> str:
        """Short text shown next to the save button."""
        return _SAVE_LABELS[self]


_SAVE_LABELS = {
    SaveStatus.MODIFIED: "Unsaved",
    SaveStatus.SAVING: "Saving...",
    SaveStatus.SAVED: "Saved",
}


@dataclass
class EditorStatus:
    """
    Snapshot of the editor's background activity, polled by the page.

    Attributes:
        save_status: Current save state.
        pending_items: Item ids with a description refinement in flight.
        numbering_pending: True while a next-number request is in flight.
    """

    save_status: SaveStatus = SaveStatus.SAVED
    pending_items: list[str] = field(default_factory=list)
    numbering_pending: bool = False

