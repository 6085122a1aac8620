"""
Rerail - interactive railway map editor.
"""

__version__ = "0.3.0"
