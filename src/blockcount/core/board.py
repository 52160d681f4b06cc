"""
Board Interaction Layer

Routes user gestures to the block store and tracks which confirmation
surface is open. Only one surface is active at a time; gestures that do not
belong to the active surface are ignored.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, List, Optional

from .events import event
from .store import BlockStore

logger = logging.getLogger(__name__)


class Modal(str, Enum):
    """The confirmation surface currently shown."""
    NONE = "none"
    ADD_DIALOG = "add_dialog"
    DELETE_CONFIRM = "delete_confirm"
    CLEAR_ALL_CONFIRM = "clear_all_confirm"


class Board:
    """
    Single-screen interaction state over a BlockStore.

    Each gesture is an @event method: it returns True when the gesture was
    accepted in the current modal state and False when it was ignored.
    """

    _namespace = "board"

    def __init__(self, store: BlockStore, title: str = "羽球小學堂"):
        self.store = store
        self.title = title
        self.modal: Modal = Modal.NONE
        self.pending_text: str = ""
        self.deletion_target: Optional[str] = None
        self._listeners: List[Callable[[str], None]] = []
        store.subscribe(self._notify)

    @property
    def is_idle(self) -> bool:
        return self.modal is Modal.NONE

    @property
    def can_confirm_increment(self) -> bool:
        return self.is_idle and bool(self.store.selection)

    @property
    def signals(self) -> Dict[str, Any]:
        """Client-side Datastar signals owned by the board."""
        return {"draft": self.pending_text}

    def subscribe(self, listener: Callable[[str], None]) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Callable[[str], None]) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self, change: str) -> None:
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception(f"Board listener {listener!r} failed on {change!r}")

    def _expect(self, gesture: str, *modals: Modal) -> bool:
        if self.modal in modals:
            return True
        logger.debug(f"Ignored {gesture} while {self.modal.value} is active")
        return False

    def _set_modal(self, modal: Modal) -> None:
        self.modal = modal
        self._notify("modal")

    # ------------------------------------------------------------------ #
    # Add dialog

    @event
    def open_add(self) -> bool:
        if not self._expect("open_add", Modal.NONE):
            return False
        self._set_modal(Modal.ADD_DIALOG)
        return True

    def enter_text(self, text: str) -> bool:
        """Update the text typed into the add dialog."""
        if not self._expect("enter_text", Modal.ADD_DIALOG):
            return False
        self.pending_text = text
        self._notify("draft")
        return True

    @event
    def submit_add(self, draft: Optional[str] = None) -> bool:
        """Add a block from the dialog text. The text is cleared either way."""
        if not self._expect("submit_add", Modal.ADD_DIALOG):
            return False
        if draft is not None:
            self.pending_text = draft
        self.store.add(self.pending_text)
        self.pending_text = ""
        self._set_modal(Modal.NONE)
        return True

    @event
    def cancel_add(self) -> bool:
        if not self._expect("cancel_add", Modal.ADD_DIALOG):
            return False
        self.pending_text = ""
        self._set_modal(Modal.NONE)
        return True

    # ------------------------------------------------------------------ #
    # Delete confirmation

    @event
    def long_press(self, block_id: str) -> bool:
        if not self._expect("long_press", Modal.NONE):
            return False
        self.store.request_delete(block_id)
        self.deletion_target = block_id
        self._set_modal(Modal.DELETE_CONFIRM)
        return True

    @event
    def confirm_delete(self) -> bool:
        if not self._expect("confirm_delete", Modal.DELETE_CONFIRM):
            return False
        self.store.confirm_delete()
        self.deletion_target = None
        self._set_modal(Modal.NONE)
        return True

    @event
    def cancel_delete(self) -> bool:
        if not self._expect("cancel_delete", Modal.DELETE_CONFIRM):
            return False
        self.store.cancel_delete()
        self.deletion_target = None
        self._set_modal(Modal.NONE)
        return True

    # ------------------------------------------------------------------ #
    # Clear-all confirmation

    @event
    def open_clear_all(self) -> bool:
        if not self._expect("open_clear_all", Modal.NONE):
            return False
        self._set_modal(Modal.CLEAR_ALL_CONFIRM)
        return True

    @event
    def confirm_clear_all(self) -> bool:
        if not self._expect("confirm_clear_all", Modal.CLEAR_ALL_CONFIRM):
            return False
        self.store.clear_all()
        self._set_modal(Modal.NONE)
        return True

    @event
    def cancel_clear_all(self) -> bool:
        if not self._expect("cancel_clear_all", Modal.CLEAR_ALL_CONFIRM):
            return False
        self._set_modal(Modal.NONE)
        return True

    # ------------------------------------------------------------------ #
    # Selection

    @event
    def tap(self, block_id: str) -> bool:
        if not self._expect("tap", Modal.NONE):
            return False
        self.store.toggle_select(block_id)
        return True

    @event
    def confirm_increment(self) -> bool:
        if not self.can_confirm_increment:
            logger.debug("Ignored confirm_increment with nothing selected or a dialog open")
            return False
        self.store.confirm_increment()
        return True

    def snapshot(self) -> Dict[str, Any]:
        """JSON-friendly view of the whole board."""
        return {
            "title": self.title,
            "modal": self.modal.value,
            "pending_text": self.pending_text,
            "deletion_target": self.deletion_target,
            "selection": sorted(self.store.selection),
            "blocks": [block.model_dump() for block in self.store.blocks],
        }
