"""
Infrastructure Adapters

Web framework integration for the board.
"""

from .fasthtml import FastHTMLDispatcher, configure_app, create_app, datastar_script

__all__ = ["FastHTMLDispatcher", "configure_app", "create_app", "datastar_script"]
