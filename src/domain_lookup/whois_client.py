"""
WHOIS transport module.

Performs the raw port-43 exchange: connect, send one CRLF-terminated query
line, read until the server closes the connection. Failures never raise to
the caller; they are reported through an explicit response type that keeps
"no data obtained" apart from "data obtained and empty", and the plain-text
contract degrades both to an empty string.
"""

import asyncio
import socket
import time
from dataclasses import dataclass
from typing import Optional, Union

from .config import DEFAULT_TIMEOUT_SECONDS, WHOIS_PORT, WHOISConfig
from .enums import LogLevel, WHOISErrorCode, WHOISStatus
from .models import WhoisServer


@dataclass
class WHOISError:
    """Error information from a WHOIS exchange."""

    code: WHOISErrorCode
    message: str


@dataclass
class WHOISResponse:
    """Response from a single WHOIS exchange."""

    server: str
    query: str
    status: WHOISStatus
    raw_response: Optional[str]
    error: Optional[WHOISError] = None
    # A read timed out after some bytes had arrived; the text is partial
    truncated: bool = False
    response_time_ms: float = 0.0

    @property
    def text(self) -> str:
        """Response text, empty when nothing was obtained."""
        return self.raw_response or ""

    @property
    def has_data(self) -> bool:
        return self.status == WHOISStatus.RECEIVED


class WHOISTransport:
    """
    Plain WHOIS (RFC 3912) client.

    Each query opens one TCP connection, with no retries. The same timeout
    bounds the connect and every individual read.
    """

    RECV_CHUNK_SIZE = 4096

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        port: int = WHOIS_PORT,
        simulation_mode: bool = False,
        logger=None,
    ) -> None:
        """
        Initialize the WHOIS transport.

        Args:
            timeout: Connect and per-read timeout in seconds
            port: Default port for servers given as plain hostnames
            simulation_mode: If True, no real network requests are made
            logger: Optional AuditLogger
        """
        self._timeout = timeout
        self._port = port
        self._simulation_mode = simulation_mode
        self._logger = logger

    @classmethod
    def from_config(
        cls,
        config: WHOISConfig,
        simulation_mode: bool = False,
        logger=None,
    ) -> "WHOISTransport":
        return cls(
            timeout=config.timeout,
            port=config.port,
            simulation_mode=simulation_mode,
            logger=logger,
        )

    @property
    def timeout(self) -> float:
        return self._timeout

    async def query(
        self,
        server: Union[WhoisServer, str],
        query_text: str,
        timeout: Optional[float] = None,
    ) -> WHOISResponse:
        """
        Send one query line to a WHOIS server and collect the reply.

        Args:
            server: WHOIS endpoint (hostname or WhoisServer)
            query_text: Query line without the terminator
            timeout: Override of the connect/read timeout in seconds

        Returns:
            WHOISResponse; status FAILED carries the error, never raised
        """
        if isinstance(server, WhoisServer):
            host, port = server.host, server.port
        else:
            host, port = server, self._port
        timeout = timeout if timeout is not None else self._timeout

        start_time = time.perf_counter()

        if self._simulation_mode:
            text = self._get_simulated_response(host, query_text)
            return self._build_response(host, query_text, text, False, start_time)

        try:
            loop = asyncio.get_running_loop()
            text, truncated = await loop.run_in_executor(
                None, self._exchange, host, port, query_text, timeout
            )
        except (socket.gaierror, UnicodeError) as e:
            # UnicodeError: hostname fails IDNA encoding (empty or >63 char label)
            return self._failure(
                host, query_text, WHOISErrorCode.RESOLUTION_ERROR,
                f"Could not resolve WHOIS server {host}: {e}", start_time,
            )
        except socket.timeout:
            return self._failure(
                host, query_text, WHOISErrorCode.TIMEOUT,
                f"WHOIS query timed out after {timeout}s", start_time,
            )
        except ConnectionError as e:
            return self._failure(
                host, query_text, WHOISErrorCode.CONNECTION_ERROR,
                f"Connection to {host}:{port} failed: {e}", start_time,
            )
        except OSError as e:
            return self._failure(
                host, query_text, WHOISErrorCode.NETWORK_ERROR,
                f"Socket error: {e}", start_time,
            )

        if truncated and not text:
            return self._failure(
                host, query_text, WHOISErrorCode.TIMEOUT,
                f"No WHOIS data received within {timeout}s", start_time,
            )

        return self._build_response(host, query_text, text, truncated, start_time)

    async def query_text(
        self,
        server: Union[WhoisServer, str],
        query_text: str,
        timeout: Optional[float] = None,
    ) -> str:
        """Like query(), returning only the text ("" on any failure)."""
        response = await self.query(server, query_text, timeout)
        return response.text

    def _exchange(
        self, host: str, port: int, query_text: str, timeout: float
    ) -> tuple[str, bool]:
        """
        Blocking socket exchange, run on the executor.

        Returns:
            Tuple of (decoded text, truncated flag)
        """
        truncated = False
        response_parts: list[bytes] = []

        with socket.create_connection((host, port), timeout=timeout) as sock:
            sock.settimeout(timeout)
            sock.sendall(f"{query_text}\r\n".encode("utf-8"))

            while True:
                try:
                    data = sock.recv(self.RECV_CHUNK_SIZE)
                except socket.timeout:
                    truncated = True
                    break
                if not data:
                    break
                response_parts.append(data)

        return b"".join(response_parts).decode("utf-8", errors="replace"), truncated

    def _build_response(
        self,
        host: str,
        query_text: str,
        text: str,
        truncated: bool,
        start_time: float,
    ) -> WHOISResponse:
        response = WHOISResponse(
            server=host,
            query=query_text,
            status=WHOISStatus.RECEIVED if text else WHOISStatus.EMPTY,
            raw_response=text,
            error=None,
            truncated=truncated,
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        self._log(
            LogLevel.DEBUG,
            f"WHOIS {host} answered {len(text)} chars",
            {
                "server": host,
                "query": query_text,
                "status": response.status.value,
                "truncated": truncated,
            },
        )
        return response

    def _failure(
        self,
        host: str,
        query_text: str,
        code: WHOISErrorCode,
        message: str,
        start_time: float,
    ) -> WHOISResponse:
        self._log(
            LogLevel.WARN,
            message,
            {"server": host, "query": query_text, "error_code": code.value},
        )
        return WHOISResponse(
            server=host,
            query=query_text,
            status=WHOISStatus.FAILED,
            raw_response=None,
            error=WHOISError(code=code, message=message),
            response_time_ms=(time.perf_counter() - start_time) * 1000,
        )

    def _log(self, level: LogLevel, message: str, data: dict) -> None:
        if self._logger:
            self._logger.log(level, "WHOISTransport", message, data)

    def _get_simulated_response(self, host: str, query_text: str) -> str:
        """
        Return a simulated reply for dry runs.

        Single-label queries get an IANA-style referral to whois.nic.<tld>.
        Domains whose first label starts with 'available-' get 'NOT FOUND',
        all others a registered record.
        """
        query = query_text.strip().lower()

        if "." not in query:
            return (
                "[SIMULATED]\n"
                f"domain:       {query.upper()}\n"
                f"whois:        whois.nic.{query}\n"
            )

        sld = query.split(".")[0]
        if sld.startswith("available-"):
            return "[SIMULATED]\nNOT FOUND\n"

        return (
            "[SIMULATED]\n"
            f"Domain Name: {query.upper()}\n"
            "Registrar: Example Registrar\n"
            "Creation Date: 2020-01-01\n"
        )
