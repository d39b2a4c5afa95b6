"""
File utility functions for Slide Text Server.
"""
import os
from typing import Tuple


def check_file_writeable(filepath: str) -> Tuple[bool, str]:
    """
    Check if a file can be written to.

    Args:
        filepath: Path to the file

    Returns:
        Tuple of (is_writeable, error_message)
    """
    if os.path.exists(filepath):
        if not os.access(filepath, os.W_OK):
            return False, f"File {filepath} is not writeable (permission denied)"
        return True, ""

    directory = os.path.dirname(filepath) or "."
    if not os.path.isdir(directory):
        return False, f"Directory {directory} does not exist"
    if not os.access(directory, os.W_OK):
        return False, f"Cannot create file in {directory} (permission denied)"
    return True, ""


def ensure_pptx_extension(filename: str) -> str:
    """
    Ensure filename has .pptx extension.

    Args:
        filename: The filename to check

    Returns:
        Filename with .pptx extension
    """
    if not filename.lower().endswith('.pptx'):
        return filename + '.pptx'
    return filename
