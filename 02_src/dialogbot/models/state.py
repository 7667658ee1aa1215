"""Records kept in conversation and user state."""

from dataclasses import dataclass


@dataclass
class UserProfile:
    """Per-user profile. `name` is None until the name dialog completes."""

    name: str | None = None


@dataclass
class CounterState:
    """Per-conversation turn counter."""

    turn_count: int = 0


@dataclass
class DialogState:
    """Dialog stack slot for a conversation.

    Holds the id and pending step of the active dialog, or nothing.
    """

    dialog_id: str | None = None
    step: str | None = None

    @property
    def is_active(self) -> bool:
        return self.dialog_id is not None and self.step is not None
