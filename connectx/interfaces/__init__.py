"""
connectx.interfaces - User interfaces for ConnectX

This package contains the command-line interface for playing against the
engine and analyzing positions.
"""

# Don't import anything here to avoid circular imports
__all__ = []
