"""
Input module - maps devices to narrative actions.
"""

from lyrebird.input.handler import InputHandler, InputEvent

__all__ = ["InputHandler", "InputEvent"]
