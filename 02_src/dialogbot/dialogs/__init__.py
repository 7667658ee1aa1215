"""Dialogs module."""

from .name_dialog import (
    GREETING_TEMPLATE,
    NAME_DIALOG_ID,
    NAME_PROMPT,
    NameDialog,
    NameDialogStep,
    Transition,
    begin,
    transition,
)

__all__ = [
    "GREETING_TEMPLATE",
    "NAME_DIALOG_ID",
    "NAME_PROMPT",
    "NameDialog",
    "NameDialogStep",
    "Transition",
    "begin",
    "transition",
]
