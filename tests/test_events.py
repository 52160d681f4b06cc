"""
Test Event Decorator System

Verifies that @event methods run normally on instances and produce Datastar
action strings on the class.
"""

from blockcount.core.board import Board
from blockcount.core.events import EventMethodDescriptor, discover_events, event
from blockcount.core.store import BlockStore
from blockcount.persistence import MemoryStorage


def test_class_access_generates_action_strings():
    assert Board.open_add() == "@post('/board/open_add')"
    assert Board.tap("abc") == "@post('/board/tap?block_id=abc')"
    assert Board.long_press(block_id="a b") == "@post('/board/long_press?block_id=a+b')"
    assert Board.submit_add() == "@post('/board/submit_add')"

    print("✓ Action string generation works")


def test_instance_access_runs_the_gesture():
    board = Board(BlockStore(MemoryStorage()))
    assert board.open_add() is True
    assert board.submit_add("Alice") is True
    assert [b.name for b in board.store.blocks] == ["Alice"]


def test_discover_events_lists_gestures_only():
    events = discover_events(Board)
    assert set(events) == {
        "open_add", "submit_add", "cancel_add",
        "long_press", "confirm_delete", "cancel_delete",
        "open_clear_all", "confirm_clear_all", "cancel_clear_all",
        "tap", "confirm_increment",
    }
    assert all(info.method == "POST" for info in events.values())
    assert [p.name for p in events["tap"].parameters] == ["block_id"]
    assert events["tap"].namespace == "board"


def test_event_options_and_default_namespace():
    class Scoreboard:
        @event(method="get", path="/scores/reset")
        def reset(self):
            return "reset"

        @event
        def bump(self, amount: int = 1):
            return amount

    assert isinstance(Scoreboard.__dict__["reset"], EventMethodDescriptor)
    assert Scoreboard.reset() == "@get('/scores/reset')"
    assert Scoreboard.bump(amount=3) == "@post('/scoreboard/bump?amount=3')"
    assert Scoreboard().bump(5) == 5
