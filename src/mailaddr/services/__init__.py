"""
Pure parsing and validation functions for mail addresses.

This package contains the stateless building blocks the mail service calls
with raw peer input: domain validation, mailbox name normalization and
hashing, and full address parsing.
"""

__all__ = ['address', 'charclass', 'hostname', 'mailbox']
