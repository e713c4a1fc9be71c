"""
Property-based tests for WHOIS referral resolution.

A recording transport stands in for the network: it answers from a table
keyed by (server, query) and remembers every call.
"""

import asyncio
import string
from typing import Optional, Union

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from domain_lookup.config import IANA_WHOIS_SERVER, WHOISConfig
from domain_lookup.enums import ReferralSource, WHOISErrorCode, WHOISStatus
from domain_lookup.models import WhoisServer
from domain_lookup.whois_client import WHOISError, WHOISResponse, WHOISTransport
from domain_lookup.whois_referral import WHOISReferralResolver


class RecordingTransport(WHOISTransport):
    """Transport answering from a fixed table; unknown queries fail."""

    def __init__(self, replies: Optional[dict] = None) -> None:
        super().__init__()
        self.replies = replies or {}
        self.calls: list[tuple[str, str]] = []

    async def query(
        self,
        server: Union[WhoisServer, str],
        query_text: str,
        timeout: Optional[float] = None,
    ) -> WHOISResponse:
        host = server.host if isinstance(server, WhoisServer) else server
        self.calls.append((host, query_text))

        text = self.replies.get((host, query_text))
        if text is None:
            return WHOISResponse(
                server=host,
                query=query_text,
                status=WHOISStatus.FAILED,
                raw_response=None,
                error=WHOISError(WHOISErrorCode.CONNECTION_ERROR, "refused"),
            )
        return WHOISResponse(
            server=host,
            query=query_text,
            status=WHOISStatus.RECEIVED if text else WHOISStatus.EMPTY,
            raw_response=text,
        )


class IANAOnlyTransport(WHOISTransport):
    """Answers IANA queries from a table; other servers use real sockets."""

    def __init__(self, iana_replies: dict) -> None:
        super().__init__(timeout=1.0)
        self.iana_replies = iana_replies

    async def query(
        self,
        server: Union[WhoisServer, str],
        query_text: str,
        timeout: Optional[float] = None,
    ) -> WHOISResponse:
        host = server.host if isinstance(server, WhoisServer) else server
        if host == IANA_WHOIS_SERVER:
            return WHOISResponse(
                server=host,
                query=query_text,
                status=WHOISStatus.RECEIVED,
                raw_response=self.iana_replies[query_text],
            )
        return await super().query(server, query_text, timeout)


def single_label_strategy() -> st.SearchStrategy[str]:
    """Names without any dot."""
    return st.text(alphabet=string.ascii_letters + string.digits + "-", max_size=30)


def label_strategy() -> st.SearchStrategy[str]:
    return st.text(alphabet=string.ascii_lowercase + string.digits, min_size=1, max_size=20)


class TestMalformedInputProperty:
    """Names with fewer than two labels never reach the network."""

    @given(name=single_label_strategy())
    @settings(max_examples=100)
    def test_single_label_makes_no_queries(self, name: str) -> None:
        """
        *For any* name without a dot, resolve_and_query SHALL return ""
        and SHALL not query any server.
        """
        transport = RecordingTransport()
        resolver = WHOISReferralResolver(transport)

        text = asyncio.run(resolver.resolve_and_query(name))

        assert text == ""
        assert transport.calls == []

    @pytest.mark.parametrize("name", ["example.", ".", ""])
    def test_empty_last_label_makes_no_queries(self, name: str) -> None:
        """A trailing dot leaves no TLD to look up."""
        transport = RecordingTransport()
        resolver = WHOISReferralResolver(transport)

        lookup = asyncio.run(resolver.lookup(name))

        assert lookup.text == ""
        assert lookup.tld is None
        assert lookup.referral is None
        assert transport.calls == []


class TestReferralParsing:
    """The first whois: line of the IANA reply names the server."""

    def test_referral_line_is_used(self) -> None:
        resolver = WHOISReferralResolver(RecordingTransport())
        text = "refer:        whois.nic.io\n\ndomain:       IO\nwhois:        whois.nic.io\n"

        assert resolver.parse_referral(text) == "whois.nic.io"

    def test_referral_is_case_insensitive(self) -> None:
        resolver = WHOISReferralResolver(RecordingTransport())

        assert resolver.parse_referral("WHOIS:whois.example.net") == "whois.example.net"

    def test_first_referral_wins(self) -> None:
        resolver = WHOISReferralResolver(RecordingTransport())
        text = "whois: first.example\nwhois: second.example\n"

        assert resolver.parse_referral(text) == "first.example"

    @pytest.mark.parametrize("text", ["", "domain: IO\n", "whois:\n"])
    def test_missing_referral(self, text: str) -> None:
        resolver = WHOISReferralResolver(RecordingTransport())

        assert resolver.parse_referral(text) is None

    @given(label=label_strategy(), tld=st.sampled_from(["com", "io", "de", "org"]))
    @settings(max_examples=50)
    def test_extract_tld(self, label: str, tld: str) -> None:
        """*For any* multi-label name, the TLD is the lowercased last label."""
        name = f"{label}.{tld.upper()}"

        assert WHOISReferralResolver.extract_tld(name) == tld


class TestServerResolutionProperty:
    """Referral, then fallback table, then the IANA server itself."""

    @given(label=label_strategy())
    @settings(max_examples=50)
    def test_query_goes_to_referred_server(self, label: str) -> None:
        """
        *For any* domain whose TLD has a referral, the second query SHALL go
        to the referred server with the full domain, and its reply SHALL be
        returned unchanged.
        """
        domain = f"{label}.io"
        authoritative = f"Domain Name: {domain.upper()}\nRegistrar: Example\n"
        transport = RecordingTransport({
            (IANA_WHOIS_SERVER, "io"): "domain: IO\nwhois: whois.nic.io\n",
            ("whois.nic.io", domain): authoritative,
        })
        resolver = WHOISReferralResolver(transport)

        text = asyncio.run(resolver.resolve_and_query(domain))

        assert text == authoritative
        assert transport.calls == [
            (IANA_WHOIS_SERVER, "io"),
            ("whois.nic.io", domain),
        ]

    def test_fallback_table_used_without_referral(self) -> None:
        """A TLD in the fallback table uses it when IANA gives no referral."""
        transport = RecordingTransport({
            (IANA_WHOIS_SERVER, "com"): "domain: COM\n",
            ("whois.verisign-grs.com", "example.com"): "Domain Name: EXAMPLE.COM\n",
        })
        resolver = WHOISReferralResolver(transport)

        lookup = asyncio.run(resolver.lookup("example.com"))

        assert lookup.referral.source == ReferralSource.FALLBACK
        assert lookup.server == "whois.verisign-grs.com"
        assert lookup.text == "Domain Name: EXAMPLE.COM\n"

    def test_fallback_table_used_when_iana_fails(self) -> None:
        """An unreachable IANA server still lets fallback TLDs resolve."""
        transport = RecordingTransport({
            ("whois.pir.org", "example.org"): "Domain Name: EXAMPLE.ORG\n",
        })
        resolver = WHOISReferralResolver(transport)

        lookup = asyncio.run(resolver.lookup("example.org"))

        assert lookup.referral.source == ReferralSource.FALLBACK
        assert lookup.text == "Domain Name: EXAMPLE.ORG\n"

    def test_iana_is_last_resort(self) -> None:
        """An unknown TLD without referral is queried at the IANA server."""
        transport = RecordingTransport({
            (IANA_WHOIS_SERVER, "zz"): "",
            (IANA_WHOIS_SERVER, "example.zz"): "refer: nowhere\n",
        })
        resolver = WHOISReferralResolver(transport)

        lookup = asyncio.run(resolver.lookup("example.zz"))

        assert lookup.referral.source == ReferralSource.IANA
        assert transport.calls[-1] == (IANA_WHOIS_SERVER, "example.zz")
        assert lookup.text == "refer: nowhere\n"

    def test_unreachable_authoritative_server_gives_empty_text(self) -> None:
        transport = RecordingTransport({
            (IANA_WHOIS_SERVER, "io"): "whois: whois.nic.io\n",
        })
        resolver = WHOISReferralResolver(transport)

        assert asyncio.run(resolver.resolve_and_query("example.io")) == ""

    @pytest.mark.parametrize(
        "referral",
        ["whois..broken-registry.example", "a" * 70 + ".example"],
    )
    def test_malformed_referral_host_gives_empty_text(self, referral: str) -> None:
        """A referred hostname that cannot be encoded degrades to ""."""
        transport = IANAOnlyTransport({"com": f"whois: {referral}\n"})
        resolver = WHOISReferralResolver(transport)

        assert asyncio.run(resolver.resolve_and_query("example.com")) == ""

        lookup = asyncio.run(resolver.lookup("example.com"))
        assert lookup.referral.server == referral
        assert lookup.response.error.code == WHOISErrorCode.RESOLUTION_ERROR

    def test_tld_is_lowercased_for_iana(self) -> None:
        transport = RecordingTransport()
        resolver = WHOISReferralResolver(transport)

        asyncio.run(resolver.lookup("Example.COM"))

        assert transport.calls[0] == (IANA_WHOIS_SERVER, "com")

    def test_custom_fallback_table(self) -> None:
        """Injected fallback tables replace the defaults and are lowercased."""
        config = WHOISConfig(fallback_servers={"DE": "whois.denic.de"})
        transport = RecordingTransport({
            ("whois.denic.de", "example.de"): "Domain: example.de\nStatus: connect\n",
        })
        resolver = WHOISReferralResolver(transport, config)

        lookup = asyncio.run(resolver.lookup("example.de"))

        assert resolver.fallback_server("de") == "whois.denic.de"
        assert resolver.fallback_server("com") is None
        assert lookup.server == "whois.denic.de"

    def test_custom_iana_server(self) -> None:
        config = WHOISConfig(iana_server="whois.test.example", fallback_servers={})
        transport = RecordingTransport()
        resolver = WHOISReferralResolver(transport, config)

        asyncio.run(resolver.lookup("example.com"))

        assert transport.calls[0] == ("whois.test.example", "com")
        assert resolver.iana_server == WhoisServer("whois.test.example")
