"""
Shared fixtures for tlschecker tests
"""
import json
import threading
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer

import pytest
import requests


def _build_response(status_code=200, body=b"", reason="OK"):
    """Build a real requests.Response carrying the given body"""
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if not isinstance(body, bytes):
        body = json.dumps(body).encode("utf-8")
    response._content = body  # pylint: disable=protected-access
    response._content_consumed = True  # pylint: disable=protected-access
    response.encoding = "utf-8"
    return response


@pytest.fixture
def make_response():
    """Factory for canned responses of the remote service"""
    return _build_response


@pytest.fixture
def sample_payload():
    """Trimmed-down document as returned by the chain tester service"""
    return {
        "hostName": "www.example.com",
        "certAlgList": [
            {
                "codes": ["CERT_VALID"],
                "algorithm": "RSA",
                "certList": [
                    {
                        "certType": "END_ENTITY",
                        "issuedByOrg": ["DigiCert Inc"],
                        "issuedByCommonName": ["DigiCert TLS RSA SHA256 2020 CA1"],
                        "issuedByCountry": ["US"],
                        "serialNumberHex": "0FBE08B0854D05738AB0CCE1C9AFEEC9",
                        "fetchType": "SERVER",
                        "revocationCheckModel": {
                            "ocspCheck": {
                                "ocspCheckStatus": "SUCCESS",
                                "ocspStatus": "GOOD",
                                "reason": None,
                            },
                            "crlCheck": {"status": "SKIPPED", "codes": [3]},
                        },
                        "productType": "OV",
                        "sctPresent": 1,
                        "O": ["Internet Corporation for Assigned Names and Numbers"],
                        "CN": ["www.example.org"],
                        "C": ["US"],
                        "validFrom": "2024-01-30",
                        "validTo": "2025-03-01",
                        "sigAlg": "SHA256withRSA",
                        "keyLength": "2048",
                        "sanList": "www.example.org, example.com",
                        "revocationDetails": {
                            "method": "OCSP",
                            "status": "GOOD",
                            "reason": 0,
                        },
                    },
                ],
            },
        ],
        "serverCertAlgList": [
            {
                "algorithm": "RSA",
                "certList": [
                    {
                        "issuedByOrg": ["DigiCert Inc"],
                        "CN": ["www.example.org"],
                        "validTo": "2025-03-01",
                        "issuedByOrgUnit": ["www.digicert.com"],
                    },
                ],
            },
        ],
        "sslConfig": {
            "cipherSuites": [
                "TLS_AES_128_GCM_SHA256",
                "TLS_CHACHA20_POLY1305_SHA256",
            ],
            "portNumber": 443,
            "ipAddress": "93.184.215.14",
            "serverName": "www.example.com",
            "hsts": "max-age=31536000",
            "heartbleed": False,
            "poodle": False,
            "poodletls": False,
            "freak": False,
            "beast": True,
            "crime": False,
            "secureRenegotiation": True,
            "downgradeAttackPrevention": "Supported",
            "sessionTickets": True,
            "Protocols": {
                "sslv2Status": False,
                "sslv3Status": False,
                "tlsv1Status": True,
                "tlsv1_1Status": True,
                "tlsv1_2Status": True,
            },
            "ocspStaplingStatus": True,
        },
        "someFutureField": {"ignored": True},
    }


class StubService:
    """
    Local HTTP stand-in for the chain tester service.

    ``mode`` picks the behaviour of the next request:
    ``json`` answers at once, ``hang`` never sends headers, ``stall`` sends
    headers and part of the body then stops, ``trickle`` sends the body one
    byte every ``interval`` seconds.
    """

    def __init__(self, server):
        self.server = server
        self.mode = "json"
        self.status = 200
        self.body = b"{}"
        self.interval = 0.05
        self.received = []
        self.release = threading.Event()

    @property
    def url(self):
        host, port = self.server.server_address[:2]
        return f"http://{host}:{port}/chainTester/webservice/validatecerts/json"


class _StubHandler(BaseHTTPRequestHandler):

    def do_GET(self):  # pylint: disable=invalid-name
        stub = self.server.stub
        stub.received.append((self.path, self.headers))
        try:
            if stub.mode == "hang":
                stub.release.wait(10)
                return
            self.send_response(stub.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(stub.body)))
            self.end_headers()
            if stub.mode == "stall":
                self.wfile.write(stub.body[:10])
                self.wfile.flush()
                stub.release.wait(10)
            elif stub.mode == "trickle":
                for i in range(len(stub.body)):
                    if stub.release.wait(stub.interval):
                        return
                    self.wfile.write(stub.body[i:i + 1])
                    self.wfile.flush()
            else:
                self.wfile.write(stub.body)
        except OSError:
            # client gave up first
            pass

    def log_message(self, format, *args):  # pylint: disable=redefined-builtin
        pass


@pytest.fixture
def stub_service():
    """Running StubService, shut down after the test"""
    server = ThreadingHTTPServer(("127.0.0.1", 0), _StubHandler)
    server.daemon_threads = True
    server.stub = StubService(server)
    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield server.stub
    server.stub.release.set()
    server.shutdown()
    server.server_close()
    thread.join(5)
