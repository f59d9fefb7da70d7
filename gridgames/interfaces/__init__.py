"""
gridgames.interfaces - User interfaces for the grid games

The terminal interface lives in gridgames.interfaces.cli.
"""

# Don't import anything here to avoid circular imports
__all__ = []
