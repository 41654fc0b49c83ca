"""
TLS Checker - remote query against the chain tester web service
"""
import json
import logging
import time
from typing import Optional, Union

import requests
from urllib3.exceptions import ReadTimeoutError
from urllib3.util import Timeout

from tlschecker._errors import (
    CheckDecodeError,
    CheckRequestError,
    CheckStatusError,
    CheckTimeoutError,
    CheckTransportError,
)
from tlschecker._models import TlsStatus

logger = logging.getLogger(__name__)

ENDPOINT_URL = (
    "https://cryptoreport.geotrust.com/chainTester/webservice/validatecerts/json"
)
DEFAULT_PORT = 443
REQUEST_TIMEOUT = 60.0


def _remaining(deadline: Optional[float]) -> Optional[float]:
    if deadline is None:
        return None
    return deadline - time.monotonic()


def _set_read_timeout(response: requests.Response, seconds: float) -> None:
    """Bound the next socket read of a streamed response"""
    connection = getattr(response.raw, "connection", None)
    sock = getattr(connection, "sock", None)
    if sock is not None:
        sock.settimeout(seconds)


def read_body(response: requests.Response,
              deadline: Optional[float] = None) -> bytes:
    """
    Read a streamed response body, giving up once the deadline passes.

    Args:
        response: Response obtained with ``stream=True``
        deadline: time.monotonic() value the body must be read by,
                  or None to rely on the per-read socket timeout only

    Returns:
        The raw body

    Raises:
        CheckTimeoutError: the deadline passed or a read timed out
        CheckTransportError: the connection broke while reading
    """
    chunks = []
    try:
        # One byte per read keeps every read to at most one recv, so a
        # body trickling in cannot outlive the deadline.
        for chunk in response.iter_content(chunk_size=1):
            chunks.append(chunk)
            remaining = _remaining(deadline)
            if remaining is None:
                continue
            if remaining <= 0:
                raise CheckTimeoutError("response body not read in time")
            _set_read_timeout(response, remaining)
    except requests.exceptions.ConnectionError as e:
        if e.args and isinstance(e.args[0], ReadTimeoutError):
            raise CheckTimeoutError(f"response body stalled: {e}") from e
        raise CheckTransportError(str(e)) from e
    except requests.exceptions.RequestException as e:
        raise CheckTransportError(str(e)) from e
    return b"".join(chunks)


def decode_payload(body: bytes) -> TlsStatus:
    """
    Decode the first JSON value of a response body.

    Anything after the first complete JSON value is ignored.

    Raises:
        CheckDecodeError: the body is not a valid inspection result
    """
    try:
        text = body.decode("utf-8").lstrip()
        payload, _ = json.JSONDecoder().raw_decode(text)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise CheckDecodeError(f"malformed JSON response: {e}") from e
    return TlsStatus.from_dict(payload)


def check_domain(
    domain: str,
    endpoint: str = ENDPOINT_URL,
    timeout: Union[float, Timeout] = REQUEST_TIMEOUT,
) -> TlsStatus:
    """
    Ask the remote service to inspect the TLS setup of a domain.

    Args:
        domain: Host name to inspect (e.g., "www.google.com")
        endpoint: Service URL, only overridden to target a stub service
        timeout: Seconds allowed for the whole round trip, body included,
                 or a prepared urllib3 Timeout

    Returns:
        The decoded TlsStatus

    Raises:
        CheckRequestError: the endpoint URL is unusable
        CheckTimeoutError: no complete answer within the timeout
        CheckTransportError: any other network failure
        CheckStatusError: status outside 200-299
        CheckDecodeError: the body is not a valid inspection result
    """
    if not isinstance(timeout, Timeout):
        timeout = Timeout(total=timeout)
    deadline = None
    if timeout.total is not None:
        deadline = time.monotonic() + timeout.total

    params = {"domain": domain, "port": str(DEFAULT_PORT)}
    # The service has always been called with this header, even on GET
    headers = {"Content-Type": "application/json"}

    logger.debug("GET %s domain=%s port=%d", endpoint, domain, DEFAULT_PORT)
    try:
        response = requests.get(
            endpoint, params=params, headers=headers, timeout=timeout,
            stream=True)
    except (requests.exceptions.MissingSchema,
            requests.exceptions.InvalidSchema,
            requests.exceptions.InvalidURL) as e:
        raise CheckRequestError(f"invalid endpoint {endpoint!r}: {e}") from e
    except requests.exceptions.Timeout as e:
        logger.warning("Request for %s timed out", domain)
        raise CheckTimeoutError(
            f"no response within {timeout.total} seconds: {e}") from e
    except requests.exceptions.RequestException as e:
        logger.warning("Request for %s failed: %s", domain, e)
        raise CheckTransportError(str(e)) from e

    try:
        logger.debug("Response status: %d", response.status_code)
        if not 200 <= response.status_code <= 299:
            raise CheckStatusError(response.status_code, response.reason)

        remaining = _remaining(deadline)
        if remaining is not None:
            if remaining <= 0:
                raise CheckTimeoutError(
                    f"no response within {timeout.total} seconds")
            _set_read_timeout(response, remaining)
        try:
            body = read_body(response, deadline)
        except CheckTimeoutError:
            logger.warning("Response for %s timed out", domain)
            raise
    finally:
        response.close()

    return decode_payload(body)
