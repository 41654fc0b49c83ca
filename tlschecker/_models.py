"""
Inspection result returned by the remote chain tester service

The records mirror the vendor JSON document field for field. Absent or
null fields decode to their zero value, unknown fields are ignored and a
value of the wrong JSON type raises CheckDecodeError.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from tlschecker._errors import CheckDecodeError


def _section(data: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise CheckDecodeError(
            f"field {key!r}: expected object, got {type(value).__name__}")
    return value


def _records(data: Mapping[str, Any], key: str) -> Tuple[Mapping[str, Any], ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise CheckDecodeError(
            f"field {key!r}: expected array, got {type(value).__name__}")
    for item in value:
        if not isinstance(item, dict):
            raise CheckDecodeError(
                f"field {key!r}: expected array of objects")
    return tuple(value)


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise CheckDecodeError(
            f"field {key!r}: expected string, got {type(value).__name__}")
    return value


def _strings(data: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = data.get(key)
    if value is None:
        return ()
    if not isinstance(value, list) or not all(
            isinstance(item, str) for item in value):
        raise CheckDecodeError(f"field {key!r}: expected array of strings")
    return tuple(value)


def _int(data: Mapping[str, Any], key: str) -> int:
    value = data.get(key)
    if value is None:
        return 0
    # bool is an int subclass, JSON true is not a number
    if isinstance(value, bool) or not isinstance(value, int):
        raise CheckDecodeError(
            f"field {key!r}: expected integer, got {type(value).__name__}")
    return value


def _bool(data: Mapping[str, Any], key: str) -> bool:
    value = data.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise CheckDecodeError(
            f"field {key!r}: expected boolean, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class OcspCheck:
    """OCSP lookup performed by the service for one certificate"""
    check_status: str = ""
    status: str = ""
    reason: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OcspCheck":
        return cls(
            check_status=_str(data, "ocspCheckStatus"),
            status=_str(data, "ocspStatus"),
            reason=data.get("reason"),
        )


@dataclass(frozen=True)
class RevocationCheckModel:
    ocsp_check: OcspCheck = field(default_factory=OcspCheck)
    crl_check: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RevocationCheckModel":
        return cls(
            ocsp_check=OcspCheck.from_dict(_section(data, "ocspCheck")),
            crl_check=data.get("crlCheck"),
        )


@dataclass(frozen=True)
class RevocationDetails:
    method: str = ""
    status: str = ""
    reason: Any = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RevocationDetails":
        return cls(
            method=_str(data, "method"),
            status=_str(data, "status"),
            reason=data.get("reason"),
        )


@dataclass(frozen=True)
class CertificateInfo:  # pylint: disable=too-many-instance-attributes
    """
    One certificate of a chain as described by the service.

    Subject fields keep the vendor's short names (O, OU, CN, L, C, S) in
    lower case. The chain entries of ``certAlgList`` also carry the
    certificate type, fetch type and revocation data; the entries of
    ``serverCertAlgList`` leave those at their zero value.
    """
    issued_by_org: Tuple[str, ...] = ()
    issued_by_common_name: Tuple[str, ...] = ()
    issued_by_country: Tuple[str, ...] = ()
    issued_by_org_unit: Tuple[str, ...] = ()
    serial_number_hex: str = ""
    product_type: str = ""
    sct_present: int = 0
    o: Tuple[str, ...] = ()
    ou: Tuple[str, ...] = ()
    cn: Tuple[str, ...] = ()
    l: Tuple[str, ...] = ()
    c: Tuple[str, ...] = ()
    s: Tuple[str, ...] = ()
    valid_from: str = ""
    valid_to: str = ""
    sig_alg: str = ""
    key_length: str = ""
    san_list: str = ""
    cert_type: str = ""
    fetch_type: str = ""
    revocation_check_model: RevocationCheckModel = field(
        default_factory=RevocationCheckModel)
    revocation_details: RevocationDetails = field(
        default_factory=RevocationDetails)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CertificateInfo":
        return cls(
            issued_by_org=_strings(data, "issuedByOrg"),
            issued_by_common_name=_strings(data, "issuedByCommonName"),
            issued_by_country=_strings(data, "issuedByCountry"),
            issued_by_org_unit=_strings(data, "issuedByOrgUnit"),
            serial_number_hex=_str(data, "serialNumberHex"),
            product_type=_str(data, "productType"),
            sct_present=_int(data, "sctPresent"),
            o=_strings(data, "O"),
            ou=_strings(data, "OU"),
            cn=_strings(data, "CN"),
            l=_strings(data, "L"),
            c=_strings(data, "C"),
            s=_strings(data, "S"),
            valid_from=_str(data, "validFrom"),
            valid_to=_str(data, "validTo"),
            sig_alg=_str(data, "sigAlg"),
            key_length=_str(data, "keyLength"),
            san_list=_str(data, "sanList"),
            cert_type=_str(data, "certType"),
            fetch_type=_str(data, "fetchType"),
            revocation_check_model=RevocationCheckModel.from_dict(
                _section(data, "revocationCheckModel")),
            revocation_details=RevocationDetails.from_dict(
                _section(data, "revocationDetails")),
        )


@dataclass(frozen=True)
class CertAlgorithm:
    """Certificate chain built for one key algorithm"""
    algorithm: str = ""
    codes: Tuple[str, ...] = ()
    cert_list: Tuple[CertificateInfo, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CertAlgorithm":
        return cls(
            algorithm=_str(data, "algorithm"),
            codes=_strings(data, "codes"),
            cert_list=tuple(CertificateInfo.from_dict(item)
                            for item in _records(data, "certList")),
        )


@dataclass(frozen=True)
class Protocols:
    """Protocol versions the server accepts"""
    sslv2: bool = False
    sslv3: bool = False
    tlsv1: bool = False
    tlsv1_1: bool = False
    tlsv1_2: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Protocols":
        return cls(
            sslv2=_bool(data, "sslv2Status"),
            sslv3=_bool(data, "sslv3Status"),
            tlsv1=_bool(data, "tlsv1Status"),
            tlsv1_1=_bool(data, "tlsv1_1Status"),
            tlsv1_2=_bool(data, "tlsv1_2Status"),
        )


@dataclass(frozen=True)
class SslConfig:  # pylint: disable=too-many-instance-attributes
    """Server side TLS configuration, including the negotiated cipher suites"""
    cipher_suites: Tuple[str, ...] = ()
    port_number: int = 0
    ip_address: str = ""
    http_server_signature: str = ""
    server_name: str = ""
    hsts: str = ""
    heartbleed: bool = False
    poodle: bool = False
    poodle_tls: bool = False
    freak: bool = False
    beast: bool = False
    crime: bool = False
    npn: bool = False
    secure_renegotiation: bool = False
    downgrade_attack_prevention: str = ""
    session_tickets: bool = False
    session_cache: bool = False
    protocols: Protocols = field(default_factory=Protocols)
    compression: bool = False
    rc4: bool = False
    heartbeat: bool = False
    ocsp_stapling: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SslConfig":
        return cls(
            cipher_suites=_strings(data, "cipherSuites"),
            port_number=_int(data, "portNumber"),
            ip_address=_str(data, "ipAddress"),
            http_server_signature=_str(data, "httpServerSignature"),
            server_name=_str(data, "serverName"),
            hsts=_str(data, "hsts"),
            heartbleed=_bool(data, "heartbleed"),
            poodle=_bool(data, "poodle"),
            poodle_tls=_bool(data, "poodletls"),
            freak=_bool(data, "freak"),
            beast=_bool(data, "beast"),
            crime=_bool(data, "crime"),
            npn=_bool(data, "npn"),
            secure_renegotiation=_bool(data, "secureRenegotiation"),
            downgrade_attack_prevention=_str(
                data, "downgradeAttackPrevention"),
            session_tickets=_bool(data, "sessionTickets"),
            session_cache=_bool(data, "sessionCache"),
            protocols=Protocols.from_dict(_section(data, "Protocols")),
            compression=_bool(data, "compressionStatus"),
            rc4=_bool(data, "rc4Status"),
            heartbeat=_bool(data, "heartbeatStatus"),
            ocsp_stapling=_bool(data, "ocspStaplingStatus"),
        )


@dataclass(frozen=True)
class TlsStatus:
    """Container for the decoded inspection result of one domain"""
    host_name: str = ""
    cert_alg_list: Tuple[CertAlgorithm, ...] = ()
    server_cert_alg_list: Tuple[CertAlgorithm, ...] = ()
    ssl_config: SslConfig = field(default_factory=SslConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "TlsStatus":
        """
        Decode the JSON document returned by the service.

        Args:
            data: Parsed JSON body; ``None`` (a literal ``null`` body)
                  decodes to an empty result

        Raises:
            CheckDecodeError: if the document does not fit the schema
        """
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise CheckDecodeError(
                f"expected JSON object, got {type(data).__name__}")
        return cls(
            host_name=_str(data, "hostName"),
            cert_alg_list=tuple(CertAlgorithm.from_dict(item)
                                for item in _records(data, "certAlgList")),
            server_cert_alg_list=tuple(
                CertAlgorithm.from_dict(item)
                for item in _records(data, "serverCertAlgList")),
            ssl_config=SslConfig.from_dict(_section(data, "sslConfig")),
        )
