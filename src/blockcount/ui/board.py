"""
Board rendering

Pure functions from Board state to FastHTML components. The whole board is
one fragment (``#board``) so every change re-renders it in a single
Datastar merge.
"""

import json

from fasthtml.common import *
from monsterui.all import *

from ..core.board import Board, Modal
from ..core.entity import NameBlock

BOARD_ID = "board"
LIVE_PATH = "/board/live"


def block_card(board: Board, block: NameBlock):
    """One name block: tap toggles selection, long-press asks for deletion."""
    selected = board.store.is_selected(block.id)
    marked = block.id == board.deletion_target
    if marked:
        tone = "bg-red-200 ring-2 ring-red-500"
    elif selected:
        tone = "bg-yellow-200"
    else:
        tone = "bg-blue-100"
    return Div(
        {"data-on-click": Board.tap(block.id),
         "data-on-contextmenu__prevent": Board.long_press(block.id)},
        Div(block.name, cls="font-semibold truncate"),
        Div(str(block.count), cls="text-4xl font-bold text-blue-600"),
        id=f"block-{block.id}",
        cls=f"{tone} rounded-lg p-4 min-h-[70px] text-center cursor-pointer select-none",
        aria_selected="true" if selected else "false",
    )


def toolbar(board: Board):
    return Div(
        Button(UkIcon("trash-2"), data_on_click=Board.open_clear_all(),
               cls=ButtonT.ghost, title="Clear all", id="open-clear-all"),
        H1(board.title, cls="text-2xl font-bold"),
        Button(UkIcon("plus"), data_on_click=Board.open_add(),
               cls=ButtonT.ghost, title="Add name", id="open-add"),
        cls="flex items-center justify-between mb-4",
    )


def confirm_increment_button(board: Board):
    if not board.store.selection:
        return None
    return Button(
        UkIcon("circle-check"), Span("Confirm Add 1"),
        data_on_click=Board.confirm_increment(),
        cls="bg-green-600 text-white rounded-lg px-4 py-2 flex items-center gap-2",
        id="confirm-increment",
    )


def _dialog(title: str, *content, actions):
    return Div(
        Div(
            H3(title, cls="text-lg font-semibold mb-3"),
            *content,
            Div(*actions, cls="flex justify-end gap-2 mt-4"),
            cls="bg-white rounded-lg shadow-lg p-6 w-80",
        ),
        cls="fixed inset-0 bg-black/40 flex items-center justify-center",
        role="dialog",
        id="dialog",
    )


def add_dialog(board: Board):
    return _dialog(
        "Add Name",
        Input({"data-on-keydown": f"evt.key === 'Enter' && {Board.submit_add()}"},
              data_bind="draft", placeholder="Enter a name", value=board.pending_text,
              autofocus=True, cls="uk-input"),
        actions=[
            Button("Cancel", data_on_click=Board.cancel_add(), cls=ButtonT.default),
            Button("Add", data_on_click=Board.submit_add(), cls=ButtonT.primary),
        ],
    )


def delete_dialog(board: Board):
    block = board.store.get(board.deletion_target) if board.deletion_target else None
    name = block.name if block else "this block"
    return _dialog(
        f"Delete {name}?",
        P("The block and its count will be removed.", cls=TextPresets.muted_sm),
        actions=[
            Button("Cancel", data_on_click=Board.cancel_delete(), cls=ButtonT.default),
            Button("Delete", data_on_click=Board.confirm_delete(), cls=ButtonT.destructive),
        ],
    )


def clear_all_dialog(board: Board):
    return _dialog(
        "Reset All Name Blocks?",
        P(f"{len(board.store)} block(s) will be removed.", cls=TextPresets.muted_sm),
        actions=[
            Button("Cancel", data_on_click=Board.cancel_clear_all(), cls=ButtonT.default),
            Button("Clear All", data_on_click=Board.confirm_clear_all(), cls=ButtonT.destructive),
        ],
    )


DIALOGS = {
    Modal.ADD_DIALOG: add_dialog,
    Modal.DELETE_CONFIRM: delete_dialog,
    Modal.CLEAR_ALL_CONFIRM: clear_all_dialog,
}


def render_board(board: Board):
    """Render the complete board fragment."""
    dialog = DIALOGS.get(board.modal)
    blocks = board.store.blocks
    return Div(
        toolbar(board),
        Grid(*[block_card(board, block) for block in blocks], cols=3, cls="gap-4")
        if blocks else P("No names yet. Tap + to add one.", cls=TextPresets.muted_sm),
        Div(confirm_increment_button(board), cls="mt-6"),
        dialog(board) if dialog else None,
        id=BOARD_ID,
        cls="container mx-auto p-4 max-w-3xl",
    )


def render_page(board: Board):
    """Full page: the board plus the live-update connection."""
    return (
        Title(board.title),
        Main(
            Div({"data-signals": json.dumps(board.signals)}),
            Div({"data-on-load": f"@get('{LIVE_PATH}')"}, id="live"),
            render_board(board),
        ),
    )
