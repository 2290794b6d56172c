"""
Mail address validation and mailbox identification for SMTP services.
"""

from .domain.models import AddressParseError, ErrorKind, RecipientResult
from .services.address import parse_email_address, format_email_address
from .services.hostname import validate_domain
from .services.mailbox import parse_mailbox_name, hash_mailbox_name

__version__ = "0.1.0"

__all__ = [
    'AddressParseError',
    'ErrorKind',
    'RecipientResult',
    'parse_email_address',
    'format_email_address',
    'validate_domain',
    'parse_mailbox_name',
    'hash_mailbox_name',
]
