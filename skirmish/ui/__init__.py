"""
User interface module for the battle engine.

This module provides the terminal menus used by the front-end.
"""
