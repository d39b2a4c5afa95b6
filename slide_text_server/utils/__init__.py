"""
Utility functions for Slide Text Server.
"""
