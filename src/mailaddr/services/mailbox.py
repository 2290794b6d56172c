"""
Mailbox name normalization and storage-key hashing.

A mailbox name is the address-book style identifier used for inbox routing:
no quoting, no escapes, case-folded, with any '+tag' sub-address removed.
"""

import hashlib

from .charclass import is_alpha, is_digit, ATEXT_SPECIALS
from ..domain.models import AddressParseError, ErrorKind


def parse_mailbox_name(raw: str) -> str:
    """
    Validate and normalize a bare mailbox name.

    Args:
        raw: Mailbox name without domain (e.g. the local-part of a recipient)

    Returns:
        str: Lowercased name with any '+tag' suffix removed

    Raises:
        AddressParseError: EMPTY_INPUT if nothing remains to route on,
            INVALID_CHARACTER if any character is outside the permitted set

    Example:
        >>> parse_mailbox_name("First.Last+news")
        'first.last'
    """
    if not raw:
        raise AddressParseError(ErrorKind.EMPTY_INPUT, "Empty mailbox name is not permitted")

    invalid = [c for c in raw if not _is_mailbox_char(c)]
    if invalid:
        raise AddressParseError(
            ErrorKind.INVALID_CHARACTER,
            f"Mailbox name contained invalid character(s): {''.join(invalid)!r}"
        )

    name = raw.split('+', 1)[0]
    if not name:
        raise AddressParseError(ErrorKind.EMPTY_INPUT, f"Mailbox name {raw!r} is empty before '+' tag")

    # Only ASCII letters are left to fold, so lower() is exact here
    return name.lower()


def hash_mailbox_name(name: str) -> str:
    """
    Derive the storage key for a normalized mailbox name.

    SHA-1 is used as a stable, filesystem-safe identifier only.

    Args:
        name: Output of parse_mailbox_name

    Returns:
        str: 40 lowercase hex digits
    """
    return hashlib.sha1(name.encode('utf-8')).hexdigest()


def _is_mailbox_char(c: str) -> bool:
    return is_alpha(c) or is_digit(c) or c == '.' or c in ATEXT_SPECIALS
