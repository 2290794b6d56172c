"""
Character-class predicates shared by the address and mailbox parsers.

All predicates work on single characters and treat anything outside
US-ASCII as not belonging to any class.
"""

# Specials permitted unquoted in a local-part word (RFC 5322 atext)
ATEXT_SPECIALS = frozenset("!#$%&'*+-/=?^_`{|}~")

# Characters permitted inside a domain label besides letters and digits
LABEL_SPECIALS = frozenset("-_")


def is_ascii(c: str) -> bool:
    return ord(c) < 0x80


def is_alpha(c: str) -> bool:
    return 'a' <= c <= 'z' or 'A' <= c <= 'Z'


def is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def is_control(c: str) -> bool:
    """Check for an ASCII control character (below 0x20, or DEL)."""
    code = ord(c)
    return code < 0x20 or code == 0x7F


def is_atext(c: str) -> bool:
    """Check if character may appear unquoted in a local-part word."""
    return is_alpha(c) or is_digit(c) or c in ATEXT_SPECIALS


def is_label_char(c: str) -> bool:
    """Check if character may appear in a domain label."""
    return is_alpha(c) or is_digit(c) or c in LABEL_SPECIALS
