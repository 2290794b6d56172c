"""
Tests for email address parsing service.
"""

import pytest

from mailaddr.domain.models import AddressParseError, ErrorKind
from mailaddr.services.address import (
    parse_email_address,
    format_email_address,
    ScanState,
)


class TestParseEmailAddress:
    """Test splitting addresses into local-part and domain."""

    @pytest.mark.parametrize("address,local,domain", [
        ("root@localhost", "root", "localhost"),
        ("FirstLast@domain.local", "FirstLast", "domain.local"),
        ("route66@prodigy.net", "route66", "prodigy.net"),
        ("lorbit!user@uucp", "lorbit!user", "uucp"),
        ("user+spam@gmail.com", "user+spam", "gmail.com"),
        ("first.last@domain.local", "first.last", "domain.local"),
        ("first\\ last@_key.domain.com", "first last", "_key.domain.com"),
        ("first\\\"last@a.b.c", "first\"last", "a.b.c"),
        ("user\\@internal@myhost.ca", "user@internal", "myhost.ca"),
        ("\"first last@evil\"@top-secret.gov", "first last@evil", "top-secret.gov"),
        ("\"line\nfeed\"@linenoise.co.uk", "line\nfeed", "linenoise.co.uk"),
        ("user+mailbox@host", "user+mailbox", "host"),
        ("customer/department=shipping@host", "customer/department=shipping", "host"),
        ("$A12345@host", "$A12345", "host"),
        ("!def!xyz%abc@host", "!def!xyz%abc", "host"),
        ("_somename@host", "_somename", "host"),
        ("a.\\.b@host", "a..b", "host"),
        ("user@host.com.", "user", "host.com."),
        ("\"a\\\x01b\"@host", "a\x01b", "host"),
        ("a\\\x7fb@host", "a\x7fb", "host"),
    ])
    def test_valid_addresses(self, address, local, domain):
        """Test valid addresses split and unescape correctly."""
        assert parse_email_address(address) == (local, domain)

    @pytest.mark.parametrize("address,kind", [
        ("", ErrorKind.EMPTY_INPUT),
        ("user", ErrorKind.MISSING_AT_SEPARATOR),
        ("@host", ErrorKind.EMPTY_INPUT),
        ("\"\"@host", ErrorKind.EMPTY_INPUT),
        ("user\\@host", ErrorKind.MISSING_AT_SEPARATOR),
        ("\"user@host\"", ErrorKind.MISSING_AT_SEPARATOR),
        ("\"user@host", ErrorKind.UNTERMINATED_QUOTE),
        ("first last@host", ErrorKind.INVALID_CHARACTER),
        ("user@bad!domain", ErrorKind.INVALID_DOMAIN),
        ("user@", ErrorKind.INVALID_DOMAIN),
        (".user@host", ErrorKind.LEADING_OR_TRAILING_DOT),
        ("user.@host", ErrorKind.LEADING_OR_TRAILING_DOT),
        ("first..last@host", ErrorKind.DOUBLED_DOT),
        ("user@bad domain", ErrorKind.INVALID_DOMAIN),
        ("james\\", ErrorKind.DANGLING_ESCAPE),
        ("high\\\x80@host", ErrorKind.NON_ASCII_ESCAPE),
        ("\"high\\\x80\"@host", ErrorKind.NON_ASCII_ESCAPE),
        ("café@host", ErrorKind.INVALID_CHARACTER),
        ("\"café\"@host", ErrorKind.INVALID_CHARACTER),
        ("embed\"quote\"string@host", ErrorKind.EMBEDDED_QUOTED_STRING),
        ("\"quoted\"tail@host", ErrorKind.EMBEDDED_QUOTED_STRING),
        ("a.\"b\"@host", ErrorKind.EMBEDDED_QUOTED_STRING),
        ("a" * 129 + "@host", ErrorKind.LOCAL_TOO_LONG),
        ("a\x01b@host", ErrorKind.INVALID_CHARACTER),
        ("\x01a@host", ErrorKind.INVALID_CHARACTER),
        ("a\x7f@host", ErrorKind.INVALID_CHARACTER),
        ("a.\tb@host", ErrorKind.INVALID_CHARACTER),
    ])
    def test_invalid_addresses(self, address, kind):
        """Test each failure reports its kind."""
        with pytest.raises(AddressParseError) as exc_info:
            parse_email_address(address)

        assert exc_info.value.kind is kind

    def test_local_length_counted_before_unescape(self):
        """Escapes count toward the 128 char limit."""
        local = "a\\b" * 43  # 129 raw chars, 86 unescaped
        with pytest.raises(AddressParseError) as exc_info:
            parse_email_address(local + "@host")

        assert exc_info.value.kind is ErrorKind.LOCAL_TOO_LONG

    def test_local_of_128_chars_accepted(self):
        """Valid up to 128 characters."""
        local, domain = parse_email_address("a" * 128 + "@domain.com")

        assert local == "a" * 128
        assert domain == "domain.com"

    def test_domain_never_unescaped(self):
        """Only the first unquoted @ splits; the rest belongs to the domain."""
        with pytest.raises(AddressParseError) as exc_info:
            parse_email_address("user@host@other")

        assert exc_info.value.kind is ErrorKind.INVALID_DOMAIN


class TestValidateLocal:
    """Test local-part grammar with a fixed valid domain."""

    @pytest.mark.parametrize("local,valid", [
        ("a", True),
        ("a" * 128, True),
        ("a" * 129, False),
        ("FirstLast", True),
        ("user123", True),
        ("a!#$%&'*+-/=?^_`{|}~", True),
        ("first.last", True),
        ("first..last", False),
        (".user", False),
        ("user.", False),
        ("james@mail", False),
        ("first last", False),
        ("tricky\\. ", False),
        ("no,commas", False),
        ("t[es]t", False),
        ("james\\", False),
        ("james\\@mail", True),
        ("quoted\\ space", True),
        ("no\\,commas", True),
        ("t\\[es\\]t", True),
        ("user\\name", True),
        ("USER\\NAME", True),
        ("user\\1", True),
        ("one\\$\\|", True),
        ("return\\\r", True),
        ("high\\\x80", False),
        ("quote\\\"", True),
        ("\"james\"", True),
        ("\"first last\"", True),
        ("\"quoted@sign\"", True),
        ("\"qp\\\"quote\"", True),
        ("\"unterminated", False),
        ("\"unterminated\\\"", False),
        ("embed\"quote\"string", False),
        ("user+mailbox", True),
        ("customer/department=shipping", True),
        ("$A12345", True),
        ("!def!xyz%abc", True),
        ("_somename", True),
    ])
    def test_local_part(self, local, valid):
        """Test local-part acceptance."""
        address = local + "@domain.com"
        if valid:
            parse_email_address(address)
        else:
            with pytest.raises(AddressParseError):
                parse_email_address(address)


class TestFormatEmailAddress:
    """Test rendering (local, domain) back to address text."""

    def test_dot_string_left_bare(self):
        """Plain locals need no quoting."""
        assert format_email_address("first.last", "example.com") == "first.last@example.com"

    def test_special_local_quoted(self):
        """Locals outside dot-string grammar become quoted-strings."""
        assert format_email_address("first last", "host") == '"first last"@host'
        assert format_email_address('a"b\\c', "host") == '"a\\"b\\\\c"@host'
        assert format_email_address("a..b", "host") == '"a..b"@host'

    @pytest.mark.parametrize("local,domain", [
        ("root", "localhost"),
        ("first last", "_key.domain.com"),
        ("first last@evil", "top-secret.gov"),
        ("line\nfeed", "linenoise.co.uk"),
        ('say "hi"', "host"),
        ("back\\slash", "host"),
        (".leading", "host"),
        ("trailing.", "host"),
    ])
    def test_round_trip(self, local, domain):
        """Formatted addresses parse back to the same pair."""
        assert parse_email_address(format_email_address(local, domain)) == (local, domain)

    def test_non_ascii_rejected(self):
        """Non-ASCII cannot be represented."""
        with pytest.raises(AddressParseError) as exc_info:
            format_email_address("café", "host")

        assert exc_info.value.kind is ErrorKind.NON_ASCII_ESCAPE

    def test_invalid_domain_rejected(self):
        """Domain must validate."""
        with pytest.raises(AddressParseError) as exc_info:
            format_email_address("user", "bad domain")

        assert exc_info.value.kind is ErrorKind.INVALID_DOMAIN

    def test_empty_local_rejected(self):
        """Empty local has no representation."""
        with pytest.raises(AddressParseError) as exc_info:
            format_email_address("", "host")

        assert exc_info.value.kind is ErrorKind.EMPTY_INPUT


def test_scan_states():
    """Scanner exposes exactly its five states."""
    assert [s.name for s in ScanState] == [
        'START', 'NORMAL', 'ESCAPED', 'QUOTED', 'QUOTED_ESCAPED'
    ]
