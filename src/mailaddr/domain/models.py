"""
Data models for mail address parsing.

These type-safe data structures define clear contracts between the parsers
and the mail service that calls them.
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Optional, Dict, Any


class ErrorKind(Enum):
    """Reason an address or mailbox name was rejected."""
    EMPTY_INPUT = "empty_input"
    INVALID_CHARACTER = "invalid_character"
    MISSING_AT_SEPARATOR = "missing_at_separator"
    UNTERMINATED_QUOTE = "unterminated_quote"
    DANGLING_ESCAPE = "dangling_escape"
    NON_ASCII_ESCAPE = "non_ascii_escape"
    LEADING_OR_TRAILING_DOT = "leading_or_trailing_dot"
    DOUBLED_DOT = "doubled_dot"
    EMBEDDED_QUOTED_STRING = "embedded_quoted_string"
    LOCAL_TOO_LONG = "local_too_long"
    INVALID_DOMAIN = "invalid_domain"


class AddressParseError(ValueError):
    """
    Raised when an address or mailbox name fails to parse.

    Attributes:
        kind: ErrorKind describing the failure
        message: Human-readable description
    """

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __repr__(self) -> str:
        return f"AddressParseError(kind={self.kind.name}, message={self.message!r})"


@dataclass
class RecipientResult:
    """
    Result of resolving one recipient address to a mailbox.

    Failures are reported through this object rather than raised, so a batch
    of recipients can be handled without exceptions for control flow.

    Attributes:
        address: Raw address as received
        success: Whether the address resolved to a mailbox
        local: Unescaped local-part (if parsing succeeded)
        domain: Domain part (if parsing succeeded)
        mailbox: Normalized mailbox name (if resolution succeeded)
        mailbox_hash: 40-char hex storage key (if resolution succeeded)
        error_kind: Reason for failure (if resolution failed)
        error_message: Error description (if resolution failed)
    """
    address: str
    success: bool
    local: Optional[str] = None
    domain: Optional[str] = None
    mailbox: Optional[str] = None
    mailbox_hash: Optional[str] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def failure(
        cls,
        address: str,
        error: AddressParseError,
        local: Optional[str] = None,
        domain: Optional[str] = None
    ) -> 'RecipientResult':
        """Build a failed result from a parse error."""
        return cls(
            address=address,
            success=False,
            local=local,
            domain=domain,
            error_kind=error.kind,
            error_message=error.message
        )

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-serializable dict.

        Returns:
            Dict with every field; error_kind rendered as its string value
        """
        result = asdict(self)
        if self.error_kind is not None:
            result['error_kind'] = self.error_kind.value
        return result

    def __repr__(self) -> str:
        """Human-readable representation for logging."""
        if self.success:
            return f"RecipientResult(success=True, address={self.address!r}, mailbox={self.mailbox})"
        else:
            return f"RecipientResult(success=False, address={self.address!r}, error={self.error_message})"
