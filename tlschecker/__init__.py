"""
TLS Checker - negotiated cipher suites of a domain

A small client for the GeoTrust chain tester web service. It asks the
service to inspect a domain on port 443 and decodes the returned
certificate chain, protocol and cipher suite report.
"""

from tlschecker._errors import (
    CheckError,
    CheckRequestError,
    CheckTransportError,
    CheckTimeoutError,
    CheckStatusError,
    CheckDecodeError,
)
from tlschecker._models import (
    TlsStatus,
    SslConfig,
    Protocols,
    CertAlgorithm,
    CertificateInfo,
)
from tlschecker._client import check_domain

__version__ = "0.1.0"
__all__ = [
    "check_domain",
    "TlsStatus",
    "SslConfig",
    "Protocols",
    "CertAlgorithm",
    "CertificateInfo",
    "CheckError",
    "CheckRequestError",
    "CheckTransportError",
    "CheckTimeoutError",
    "CheckStatusError",
    "CheckDecodeError",
]
