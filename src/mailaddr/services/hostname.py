"""
Domain validation for the part of an address following the '@'.

This module provides a total predicate over hostname-label grammar; it never
raises and never normalizes.
"""

from .charclass import is_label_char

MAX_DOMAIN_LENGTH = 255
MAX_LABEL_LENGTH = 63


def validate_domain(domain: str) -> bool:
    """
    Check that a domain is a dot-separated sequence of valid labels.

    Rules:
    - total length 1-255 characters
    - each label 1-63 characters of letters, digits, '_' or '-'
    - no label starts or ends with '-'
    - a single trailing dot (fully-qualified form) is allowed

    Args:
        domain: Domain string exactly as received

    Returns:
        bool: True if the domain is acceptable

    Example:
        >>> validate_domain("bar.com.")
        True
        >>> validate_domain("foo.-bar.com")
        False
    """
    if not domain or len(domain) > MAX_DOMAIN_LENGTH:
        return False

    labels = domain.split('.')
    if labels[-1] == '':
        # Trailing root dot
        labels = labels[:-1]
    if not labels:
        return False

    return all(_valid_label(label) for label in labels)


def _valid_label(label: str) -> bool:
    if not 1 <= len(label) <= MAX_LABEL_LENGTH:
        return False
    if label[0] == '-' or label[-1] == '-':
        return False
    return all(is_label_char(c) for c in label)
