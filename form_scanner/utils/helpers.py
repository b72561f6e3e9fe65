"""
Helper Utilities Module.

Small text and file helpers shared by the extractors, the session and
the command-line entry point.
"""

import re
from pathlib import Path
from typing import Iterable, List, Union


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.

    Example:
        >>> ensure_directory("outputs/sessions")
        PosixPath('outputs/sessions')
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def split_lines(text: str) -> List[str]:
    """
    Split OCR text into trimmed, non-empty lines.

    Example:
        >>> split_lines("  GOVERNMENT OF INDIA \\n\\n Rahul Kumar")
        ['GOVERNMENT OF INDIA', 'Rahul Kumar']
    """
    if not text:
        return []
    return [line.strip() for line in text.splitlines() if line.strip()]


def title_case(value: str) -> str:
    """
    Capitalize the first letter of each word and lower-case the rest.

    Unlike str.title() this leaves apostrophes alone, so "D'SOUZA"
    becomes "D'souza" rather than "D'Souza".

    Example:
        >>> title_case("RAHUL  KUMAR sharma")
        "Rahul Kumar Sharma"
    """
    words = re.split(r'\s+', value.strip())
    return ' '.join(w[:1].upper() + w[1:].lower() for w in words if w)


def contains_any(text: str, phrases: Iterable[str]) -> bool:
    """Return True if any phrase occurs in text, ignoring case."""
    lowered = text.lower()
    return any(phrase.lower() in lowered for phrase in phrases)


def validate_file_exists(filepath: Union[str, Path]) -> bool:
    """
    Check if a file exists and is a regular file.

    Args:
        filepath: Path to check.

    Returns:
        True if file exists and is a regular file.
    """
    path = Path(filepath)
    return path.exists() and path.is_file()
