"""
Helper functions shared by the lyrics pipeline, the web layer and the CLI
"""

import random
import re
import string
import time


# Alphabet used for base-36 encoding of request ids
_BASE36 = string.digits + string.ascii_lowercase


def normalize_whitespace(text: str) -> str:
    """
    Collapse every run of whitespace to a single space and trim

    Args:
        text: Input text

    Returns:
        Normalized text ("" for empty input)
    """
    if not text:
        return ""
    return re.sub(r'\s+', ' ', text).strip()


def to_base36(number: int) -> str:
    """
    Encode a non-negative integer in base 36

    Args:
        number: Integer to encode

    Returns:
        Lowercase base-36 string
    """
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return "0"

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(_BASE36[remainder])
    return ''.join(reversed(digits))


def generate_request_id() -> str:
    """
    Generate a short request identifier for log correlation

    Millisecond timestamp in base 36 followed by five random base-36
    characters, e.g. "lq2k9x1a3f7b0".

    Returns:
        Request id string
    """
    suffix = ''.join(random.choice(_BASE36) for _ in range(5))
    return f"{to_base36(int(time.time() * 1000))}{suffix}"


def truncate_string(text: str, max_length: int, suffix: str = "...") -> str:
    """
    Truncate string to maximum length with suffix

    Args:
        text: String to truncate
        max_length: Maximum length including suffix
        suffix: Suffix to add when truncated

    Returns:
        Truncated string
    """
    if len(text) <= max_length:
        return text

    truncate_length = max_length - len(suffix)
    if truncate_length <= 0:
        return suffix[:max_length]

    return text[:truncate_length] + suffix
