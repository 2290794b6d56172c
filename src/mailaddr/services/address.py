"""
Parsing of SMTP mail addresses (local-part@domain).

The local-part is scanned left to right by a small state machine that
honours RFC 5321 dot-string and quoted-string forms:

    addr-spec     = local "@" domain
    local         = dot-string | quoted-string
    dot-string    = word *( "." word )
    word          = 1*( atext | quoted-pair )
    quoted-pair   = "\" CHAR                 ; 7-bit only
    quoted-string = DQUOTE *( qtext | quoted-pair ) DQUOTE

Quoted-pairs and quoted-string delimiters are removed from the returned
local-part. The domain is never quoted; it is checked with validate_domain.
"""

from enum import Enum
from typing import List, Optional, Tuple

from .charclass import is_ascii, is_atext
from .hostname import validate_domain
from ..domain.models import AddressParseError, ErrorKind

MAX_LOCAL_LENGTH = 128


class ScanState(Enum):
    START = "start"                    # before a word: at position 0 or after '.'
    NORMAL = "normal"                  # inside a dot-string word
    ESCAPED = "escaped"                # after '\' outside quotes
    QUOTED = "quoted"                  # inside "..."
    QUOTED_ESCAPED = "quoted_escaped"  # after '\' inside quotes


def parse_email_address(address: str) -> Tuple[str, str]:
    """
    Split an address into its unescaped local-part and its domain.

    Args:
        address: Raw address, e.g. the argument of RCPT TO without brackets

    Returns:
        Tuple[str, str]: (local, domain)

    Raises:
        AddressParseError: If the address is malformed. No partial result is
            returned.

    Example:
        >>> parse_email_address('"first last@evil"@top-secret.gov')
        ('first last@evil', 'top-secret.gov')
    """
    if not address:
        raise AddressParseError(ErrorKind.EMPTY_INPUT, "Empty address")

    quoted_form = address[0] == '"'
    state = ScanState.START
    local: List[str] = []
    split_at = -1

    for pos, c in enumerate(address):
        state, emitted = _transition(state, c, pos, quoted_form)
        if state is None:
            split_at = pos
            break
        if emitted is not None:
            local.append(emitted)

    if split_at < 0:
        if state is ScanState.ESCAPED:
            raise AddressParseError(ErrorKind.DANGLING_ESCAPE, "Address ends with a backslash")
        if state in (ScanState.QUOTED, ScanState.QUOTED_ESCAPED):
            raise AddressParseError(ErrorKind.UNTERMINATED_QUOTE, "Quoted string is not terminated")
        raise AddressParseError(ErrorKind.MISSING_AT_SEPARATOR, f"No unquoted @ in address {address!r}")

    # Length limit applies to the text as received, not the unescaped result
    if split_at > MAX_LOCAL_LENGTH:
        raise AddressParseError(
            ErrorKind.LOCAL_TOO_LONG,
            f"Local part must not exceed {MAX_LOCAL_LENGTH} characters"
        )
    if not local:
        raise AddressParseError(ErrorKind.EMPTY_INPUT, "Local part is empty")

    domain = address[split_at + 1:]
    if not validate_domain(domain):
        raise AddressParseError(ErrorKind.INVALID_DOMAIN, f"Invalid domain {domain!r}")

    return ''.join(local), domain


def format_email_address(local: str, domain: str) -> str:
    """
    Render a (local, domain) pair as an address parse_email_address accepts.

    The local-part is emitted as a dot-string when it is one, otherwise as a
    quoted-string with '"' and '\\' escaped.

    Args:
        local: Unescaped local-part
        domain: Domain part

    Returns:
        str: Address text

    Raises:
        AddressParseError: If local is empty or not ASCII, or domain is invalid
    """
    if not local:
        raise AddressParseError(ErrorKind.EMPTY_INPUT, "Local part is empty")
    if not all(is_ascii(c) for c in local):
        raise AddressParseError(
            ErrorKind.NON_ASCII_ESCAPE,
            f"Local part {local!r} contains characters outside US-ASCII"
        )
    if not validate_domain(domain):
        raise AddressParseError(ErrorKind.INVALID_DOMAIN, f"Invalid domain {domain!r}")

    if _is_dot_string(local):
        return f"{local}@{domain}"

    quoted = ''.join('\\' + c if c in '"\\' else c for c in local)
    return f'"{quoted}"@{domain}'


def _transition(
    state: ScanState,
    c: str,
    pos: int,
    quoted_form: bool
) -> Tuple[Optional[ScanState], Optional[str]]:
    """
    Advance the local-part scanner by one character.

    Returns:
        (next_state, emitted) where next_state is None once the separating
        '@' has been reached and emitted is the character to append to the
        unescaped local-part, if any.

    Raises:
        AddressParseError: If c is not allowed in the current state
    """
    if state is ScanState.START:
        if c == '@':
            if pos == 0:
                raise AddressParseError(ErrorKind.EMPTY_INPUT, "Missing local part")
            raise AddressParseError(ErrorKind.LEADING_OR_TRAILING_DOT, "Local part cannot end with a period")
        if c == '\\':
            return ScanState.ESCAPED, None
        if c == '"':
            if pos == 0:
                return ScanState.QUOTED, None
            raise AddressParseError(
                ErrorKind.EMBEDDED_QUOTED_STRING,
                "Quoted string can only begin at start of address"
            )
        if c == '.':
            if pos == 0:
                raise AddressParseError(ErrorKind.LEADING_OR_TRAILING_DOT, "Local part cannot start with a period")
            raise AddressParseError(ErrorKind.DOUBLED_DOT, "Sequence of periods is not permitted")
        return ScanState.NORMAL, _atext(c)

    if state is ScanState.NORMAL:
        if c == '@':
            return None, None
        if quoted_form:
            raise AddressParseError(
                ErrorKind.EMBEDDED_QUOTED_STRING,
                "Quoted string must be followed by @"
            )
        if c == '\\':
            return ScanState.ESCAPED, None
        if c == '"':
            raise AddressParseError(
                ErrorKind.EMBEDDED_QUOTED_STRING,
                "Quoted string can only begin at start of address"
            )
        if c == '.':
            return ScanState.START, c
        return ScanState.NORMAL, _atext(c)

    if state is ScanState.QUOTED:
        if c == '\\':
            return ScanState.QUOTED_ESCAPED, None
        if c == '"':
            return ScanState.NORMAL, None
        if not is_ascii(c):
            raise AddressParseError(
                ErrorKind.INVALID_CHARACTER,
                f"Character {c!r} outside of US-ASCII range not permitted"
            )
        return ScanState.QUOTED, c

    # ESCAPED or QUOTED_ESCAPED: take the next character literally
    if not is_ascii(c):
        raise AddressParseError(
            ErrorKind.NON_ASCII_ESCAPE,
            f"Escaped character {c!r} outside of US-ASCII range not permitted"
        )
    if state is ScanState.QUOTED_ESCAPED:
        return ScanState.QUOTED, c
    return ScanState.NORMAL, c


def _atext(c: str) -> str:
    """Return c if it may stand unquoted in a word, else raise INVALID_CHARACTER."""
    if not is_atext(c):
        raise AddressParseError(ErrorKind.INVALID_CHARACTER, f"Character {c!r} must be quoted")
    return c


def _is_dot_string(local: str) -> bool:
    """Check if local is non-empty atext words joined by single dots."""
    return all(word and all(is_atext(c) for c in word) for word in local.split('.'))
