"""
BlockCount UI

FastHTML components for the board page.
"""

from .board import render_board, render_page, block_card, BOARD_ID, LIVE_PATH

__all__ = ["render_board", "render_page", "block_card", "BOARD_ID", "LIVE_PATH"]
