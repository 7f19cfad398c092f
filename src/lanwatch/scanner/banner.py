"""Banner grabbing and service fingerprinting.

After a TCP connect succeeds, the grabber optionally sends a protocol
probe (HTTP GET, SMTP EHLO, Redis INFO) and reads whatever the service
says back. Services that announce themselves on connect (SSH, FTP, POP3,
IMAP, MySQL) are read passively.

The raw bytes are matched against per-service patterns to extract a
product and version, an operating-system hint and known-vulnerable version
notes. An unparseable or missing banner is never an error: it produces a
``BannerInfo`` with the generic service name and no version.
"""
from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass, field

from lanwatch.scanner.ports import get_service_name

logger = logging.getLogger(__name__)

HTTP_PROBE_PORTS = frozenset({80, 443, 8000, 8008, 8080, 8081, 8443, 8888, 9000, 9090})
SMTP_PORTS = frozenset({25, 587})
REDIS_PORTS = frozenset({6379})

_USER_AGENT = "lanwatch"
_EHLO = b"EHLO scanner.local\r\n"
_REDIS_INFO = b"INFO\r\n"

MAX_READ_BYTES = 1024
MAX_BANNER_LEN = 256


def build_http_probe(host: str) -> bytes:
    return (
        f"GET / HTTP/1.1\r\n"
        f"Host: {host}\r\n"
        f"User-Agent: {_USER_AGENT}\r\n"
        f"Connection: close\r\n\r\n"
    ).encode("ascii")


@dataclass(frozen=True)
class BannerInfo:
    """Everything learned from one service's banner."""

    port: int
    service: str
    banner: str | None = None
    product: str | None = None
    version: str | None = None
    os_hint: str | None = None
    vulnerabilities: tuple[str, ...] = field(default_factory=tuple)

    @property
    def confidence(self) -> int:
        score = 50
        if self.banner:
            score += 20
        if self.version:
            score += 30
        return min(score, 100)


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

_SSH_RE = re.compile(r"SSH-[\d.]+-([A-Za-z][A-Za-z0-9]*)[_-]([\w.]+)")
_SERVER_HEADER_RE = re.compile(r"^Server:\s*(.+?)\s*$", re.IGNORECASE | re.MULTILINE)
_PRODUCT_TOKEN_RE = re.compile(r"([A-Za-z][\w\-. ]*?)(?:/([\w.\-]+))?(?:\s|$)")
_GREETING_RE = re.compile(
    r"(vsFTPd|ProFTPD|Pure-FTPd|FileZilla Server|Postfix|Exim|Sendmail|"
    r"OpenSMTPD|Dovecot|Microsoft ESMTP MAIL Service|Courier)"
    r"[\s/_(]*v?(\d+(?:\.\d+)+[\w.]*)?",
    re.IGNORECASE,
)
_REDIS_VERSION_RE = re.compile(r"redis_version:([\d.]+)")
_GENERIC_VERSION_RE = re.compile(r"\b(\d+\.\d+(?:\.\d+)?)\b")

# Checked in order; the first hit wins, so specific distributions precede
# generic kernels.
_OS_HINTS: list[tuple[str, str]] = [
    ("ubuntu", "Ubuntu Linux"),
    ("debian", "Debian Linux"),
    ("centos", "CentOS Linux"),
    ("red hat", "Red Hat Linux"),
    ("rhel", "Red Hat Linux"),
    ("fedora", "Fedora Linux"),
    ("raspbian", "Raspbian Linux"),
    ("windows", "Windows"),
    ("microsoft", "Windows"),
    ("win32", "Windows"),
    ("win64", "Windows"),
    ("freebsd", "FreeBSD"),
    ("openbsd", "OpenBSD"),
    ("darwin", "macOS"),
    ("macos", "macOS"),
    ("linux", "Linux"),
    ("unix", "Unix"),
]

# (product, version prefix) -> note
KNOWN_VULNERABLE: dict[tuple[str, str], str] = {
    ("openssh", "7.2"): "OpenSSH 7.2 allows user enumeration (CVE-2016-6210)",
    ("openssh", "7.4"): "OpenSSH 7.4 allows user enumeration (CVE-2018-15473)",
    ("apache", "2.4.49"): "Apache 2.4.49 path traversal and RCE (CVE-2021-41773)",
    ("apache", "2.4.50"): "Apache 2.4.50 path traversal and RCE (CVE-2021-42013)",
    ("nginx", "1.16"): "nginx 1.16 is end-of-life and unpatched",
    ("nginx", "1.18"): "nginx 1.18 DNS resolver off-by-one (CVE-2021-23017)",
    ("proftpd", "1.3.5"): "ProFTPD 1.3.5 mod_copy remote command execution (CVE-2015-3306)",
    ("mysql", "5.6"): "MySQL 5.6 is end-of-life and unpatched",
}


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


def sanitize_banner(raw: bytes) -> str:
    """Decode and clean up raw banner bytes."""
    text = _decode(raw)

    # Strip control chars except space/tab/newline, collapse whitespace
    cleaned = []
    for ch in text:
        if ch in ("\n", "\r", "\t"):
            cleaned.append(" ")
        elif ch.isprintable() or ch == " ":
            cleaned.append(ch)

    result = " ".join("".join(cleaned).split())
    return result[:MAX_BANNER_LEN]


def _parse_mysql_handshake(raw: bytes) -> tuple[str, str] | None:
    """Extract the server version from a MySQL protocol-10 handshake packet."""
    if len(raw) < 6 or raw[4] != 0x0A:
        return None
    end = raw.find(b"\x00", 5)
    if end == -1:
        return None
    version_text = raw[5:end].decode("ascii", errors="replace")
    product = "MariaDB" if "mariadb" in version_text.lower() else "MySQL"
    match = _GENERIC_VERSION_RE.search(version_text)
    return product, match.group(1) if match else version_text


def _parse_server_header(value: str) -> tuple[str | None, str | None]:
    match = _PRODUCT_TOKEN_RE.match(value)
    if not match:
        return None, None
    product = match.group(1).strip()
    version = match.group(2)
    if product.lower().startswith("apache"):
        product = "Apache"
    return product or None, version


def detect_os(text: str) -> str | None:
    """Return an operating-system hint found in banner text."""
    lowered = text.lower()
    for needle, name in _OS_HINTS:
        if needle in lowered:
            return name
    return None


def find_vulnerabilities(product: str | None, version: str | None) -> tuple[str, ...]:
    """Return notes for known-vulnerable product versions."""
    if not product or not version:
        return ()
    key = product.lower()
    return tuple(
        note
        for (vuln_product, prefix), note in KNOWN_VULNERABLE.items()
        if key.startswith(vuln_product) and version.startswith(prefix)
    )


def parse_banner(port: int, raw: bytes | None) -> BannerInfo:
    """Fingerprint a service from the bytes it sent.

    Parameters
    ----------
    port:
        Port the bytes were read from; selects the default service name.
    raw:
        Bytes read from the service, or ``None`` if nothing arrived.
    """
    service = get_service_name(port)
    if not raw:
        return BannerInfo(port=port, service=service)

    text = _decode(raw)
    banner = sanitize_banner(raw) or None
    product: str | None = None
    version: str | None = None

    if text.startswith("SSH-"):
        service = "SSH"
        match = _SSH_RE.search(text)
        if match:
            product, version = match.group(1), match.group(2)
    elif text.startswith("HTTP/"):
        if service == "Unknown":
            service = "HTTP"
        header = _SERVER_HEADER_RE.search(text)
        if header:
            product, version = _parse_server_header(header.group(1))
    elif "redis_version:" in text:
        service = "Redis"
        product = "Redis"
        match = _REDIS_VERSION_RE.search(text)
        if match:
            version = match.group(1)
    else:
        mysql = _parse_mysql_handshake(raw)
        greeting = _GREETING_RE.search(text)
        if mysql is not None:
            service = "MySQL"
            product, version = mysql
        elif greeting:
            product = greeting.group(1)
            version = greeting.group(2)
        elif banner:
            generic = _GENERIC_VERSION_RE.search(banner)
            if generic:
                version = generic.group(1)

    return BannerInfo(
        port=port,
        service=service,
        banner=banner,
        product=product,
        version=version,
        os_hint=detect_os(text),
        vulnerabilities=find_vulnerabilities(product, version),
    )


# ---------------------------------------------------------------------------
# Grabbing
# ---------------------------------------------------------------------------

class BannerGrabber:
    """Reads and fingerprints service banners over an open connection.

    Parameters
    ----------
    timeout:
        Seconds to wait for each read from the service.
    max_bytes:
        Upper bound on bytes read per response.
    """

    def __init__(self, timeout: float = 2.0, max_bytes: int = MAX_READ_BYTES) -> None:
        self._timeout = timeout
        self._max_bytes = max_bytes

    async def grab(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        ip: str,
        port: int,
    ) -> BannerInfo:
        """Probe the service on an already-open connection and parse the reply.

        Read failures degrade to a ``BannerInfo`` without a banner.
        """
        try:
            raw = await self._exchange(reader, writer, ip, port)
        except (asyncio.TimeoutError, ConnectionError, OSError) as exc:
            logger.debug("Banner read from %s:%d failed: %s", ip, port, exc)
            raw = None
        return parse_banner(port, raw)

    async def _exchange(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        ip: str,
        port: int,
    ) -> bytes | None:
        if port in HTTP_PROBE_PORTS:
            await self._send(writer, build_http_probe(ip))
            return await self._read(reader)

        if port in REDIS_PORTS:
            await self._send(writer, _REDIS_INFO)
            return await self._read(reader)

        if port in SMTP_PORTS:
            greeting = await self._read(reader)
            if not greeting:
                return None
            await self._send(writer, _EHLO)
            try:
                reply = await self._read(reader)
            except asyncio.TimeoutError:
                reply = b""
            return greeting + reply

        return await self._read(reader)

    async def _send(self, writer: asyncio.StreamWriter, payload: bytes) -> None:
        writer.write(payload)
        await asyncio.wait_for(writer.drain(), timeout=self._timeout)

    async def _read(self, reader: asyncio.StreamReader) -> bytes:
        return await asyncio.wait_for(reader.read(self._max_bytes), timeout=self._timeout)
