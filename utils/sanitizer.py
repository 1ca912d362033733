"""
Input Sanitization Module

Cleans free-text fields (ingredient names, suppliers, allergen lists)
before they are stored.
"""

import html
import re


def sanitize_text(text, max_length=10000):
    """
    Sanitize text by HTML-escaping special characters.

    Args:
        text: The text to sanitize (can be None)
        max_length: Maximum allowed length (default 10000)

    Returns:
        Sanitized string, truncated if necessary
    """
    if text is None:
        return ''

    if not isinstance(text, str):
        text = str(text)

    # Remove control characters and null bytes
    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)

    # Collapse runs of whitespace
    text = re.sub(r'\s+', ' ', text).strip()

    text = html.escape(text, quote=False)

    if len(text) > max_length:
        text = text[:max_length]

    return text


def sanitize_allergens(value, max_length=500):
    """
    Normalize an allergen list to "A, B, C".

    Accepts a comma separated string or a list of strings. Empty entries
    and case-insensitive duplicates are dropped, first spelling kept.

    Returns:
        Sanitized allergen string ('' when nothing remains)
    """
    if not value:
        return ''

    if isinstance(value, str):
        parts = value.split(',')
    else:
        parts = [str(v) for v in value]

    seen = {}
    for part in parts:
        cleaned = sanitize_text(part, max_length=100)
        if cleaned:
            seen.setdefault(cleaned.lower(), cleaned)

    return sanitize_text(', '.join(seen.values()), max_length=max_length)
