"""
Recipient resolution pipeline - maps RCPT TO addresses onto mailboxes.

This module handles the path from a raw recipient address to a storage key:
1. Parse the address into local-part and domain
2. Check the domain against the accepted delivery domains
3. Normalize the local-part into a mailbox name
4. Hash the mailbox name into a storage key
5. Return result (success or failure)

All parse errors, including non-string input, are returned as RecipientResult with
success=False. No exceptions propagate out of the public methods.
"""

import logging
from typing import Iterable, List, Optional

from .models import AddressParseError, ErrorKind, RecipientResult
from ..services import address as address_service
from ..services import mailbox as mailbox_service

logger = logging.getLogger(__name__)


class RecipientProcessor:
    """
    Resolves recipient addresses to normalized mailboxes.

    Args:
        accepted_domains: Domains accepted for local delivery. None or empty
            accepts every syntactically valid domain.
    """

    def __init__(self, accepted_domains: Optional[Iterable[str]] = None):
        self.accepted_domains = frozenset(
            normalize_domain(d) for d in (accepted_domains or []) if d.strip()
        )

    def resolve(self, address: str) -> RecipientResult:
        """
        Resolve a single recipient address.

        Args:
            address: Raw address from the SMTP peer

        Returns:
            RecipientResult with success=True or success=False (errors logged)
        """
        if not isinstance(address, str):
            error = AddressParseError(
                ErrorKind.INVALID_CHARACTER,
                f"Recipient must be a string, got {type(address).__name__}"
            )
            logger.warning(f"Rejected recipient {address!r}: {error.message}")
            return RecipientResult.failure(address, error)

        try:
            local, domain = address_service.parse_email_address(address)
        except AddressParseError as e:
            logger.warning(f"Rejected recipient {address!r}: {e.kind.value}: {e.message}")
            return RecipientResult.failure(address, e)

        if not self.accepts_domain(domain):
            error = AddressParseError(
                ErrorKind.INVALID_DOMAIN,
                f"Domain {domain!r} is not accepted for delivery"
            )
            logger.warning(f"Rejected recipient {address!r}: {error.message}")
            return RecipientResult.failure(address, error, local=local, domain=domain)

        try:
            mailbox = mailbox_service.parse_mailbox_name(local)
        except AddressParseError as e:
            logger.warning(f"Rejected recipient {address!r}: local part is not a mailbox name: {e.message}")
            return RecipientResult.failure(address, e, local=local, domain=domain)

        mailbox_hash = mailbox_service.hash_mailbox_name(mailbox)
        logger.info(f"Resolved recipient {address!r} -> mailbox={mailbox}, key={mailbox_hash}")

        return RecipientResult(
            address=address,
            success=True,
            local=local,
            domain=domain,
            mailbox=mailbox,
            mailbox_hash=mailbox_hash
        )

    def resolve_many(self, addresses: Iterable[str]) -> List[RecipientResult]:
        """Resolve each address in order."""
        return [self.resolve(address) for address in addresses]

    def accepts_domain(self, domain: str) -> bool:
        """Check whether mail for this domain is delivered locally."""
        if not self.accepted_domains:
            return True
        return normalize_domain(domain) in self.accepted_domains


def normalize_domain(domain: str) -> str:
    """Lowercase a domain and drop any trailing root dot, for comparison only."""
    return domain.strip().lower().rstrip('.')
