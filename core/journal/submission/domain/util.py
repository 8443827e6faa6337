"""Helpers and utilities."""

import hashlib
import re
from datetime import datetime
from typing import List

from pytz import UTC


def get_tzaware_utc_now() -> datetime:
    """Generate a datetime for the current moment in UTC."""
    return datetime.now(UTC)


def count_words(text: str) -> int:
    """Count whitespace-separated tokens."""
    return len(text.split())


def is_blank(value: str) -> bool:
    """Evaluate whether a string is empty or only whitespace."""
    return not value or not value.strip()


def tidy(text: str) -> str:
    """Collapse runs of whitespace and strip the ends."""
    return re.sub(r'\s+', ' ', text).strip()


def split_list(value: str, delimiter: str = ';') -> List[str]:
    """Split a delimited string, trimming items and dropping empties."""
    return [item.strip() for item in value.split(delimiter) if item.strip()]


def split_paragraphs(value: str) -> List[str]:
    """Split text on blank lines, trimming items and dropping empties."""
    return [item.strip() for item in re.split(r'\n\s*\n', value)
            if item.strip()]


def make_identifier(*parts: str) -> str:
    """Generate a sha1 hex digest from ``parts``."""
    h = hashlib.new('sha1')
    h.update(':'.join(parts).encode('utf-8'))
    return h.hexdigest()
