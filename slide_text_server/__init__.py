"""
Slide Text Server - chunk-aware search and replace for PowerPoint decks.
"""
__version__ = "0.3.0"
