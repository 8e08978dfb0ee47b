"""
Helper Utilities Module.

Small text and filesystem helpers shared by the engine and the
command-line entry point.

Functions:
    - normalize_text: NFC-normalize OCR text
    - collapse_whitespace: Normalize NBSP and whitespace runs
    - split_lines: Trimmed, non-empty text lines
    - ensure_directory: Create directory if it doesn't exist
    - get_file_extension: Extract file extension safely
"""

import re
import unicodedata
from pathlib import Path
from typing import List, Union

_WHITESPACE_RUN = re.compile(r'\s+')


def normalize_text(text: str) -> str:
    """
    Normalize OCR text to Unicode NFC form.

    OCR engines sometimes emit decomposed accents ("o" + combining
    acute) which would not match composed vocabulary like "bónus".

    Args:
        text: Raw recognized text (None is treated as empty).

    Returns:
        NFC-normalized text.
    """
    if not text:
        return ""
    return unicodedata.normalize("NFC", text)


def collapse_whitespace(text: str) -> str:
    """
    Replace non-breaking spaces and collapse whitespace runs to one space.

    Example:
        >>> collapse_whitespace("1 234,56   kr")
        "1 234,56 kr"
    """
    return _WHITESPACE_RUN.sub(' ', text.replace('\u00a0', ' ')).strip()


def split_lines(text: str) -> List[str]:
    """
    Split text into trimmed, non-empty lines.

    Args:
        text: Multi-line text.

    Returns:
        List of lines in original order.
    """
    return [line.strip() for line in normalize_text(text).splitlines() if line.strip()]


def ensure_directory(path: Union[str, Path]) -> Path:
    """
    Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path to ensure exists.

    Returns:
        Path object pointing to the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


def get_file_extension(filepath: Union[str, Path]) -> str:
    """
    Extract the lowercase file extension, including the dot.

    Example:
        >>> get_file_extension("receipt.TXT")
        ".txt"
    """
    return Path(filepath).suffix.lower()
