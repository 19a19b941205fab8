"""
transport.py

Executes a ResolvedRequest over HTTP with ``requests``. No retry or rate-limit
handling is done here. Non-2xx statuses, timeouts, connection errors and
undecodable JSON bodies are logged, reported to Sentry and re-raised unchanged.
"""

from typing import Any, Optional

import requests

from covalent_api.api.credentials import mask_credential
from covalent_api.api.enums import OutputFormat
from covalent_api.api.models import ResolvedRequest
from covalent_api.utils.logger import get_logger
from covalent_api.utils.sentry import add_breadcrumb, capture_exception

logger = get_logger(__name__)


def execute(request: ResolvedRequest, timeout: Optional[float] = None,
            session: Optional[requests.Session] = None, api_key: str = "") -> Any:
    """
    Issues the GET request and returns the response body.

    :param request: The request produced by the request builder.
    :param timeout: Seconds before requests gives up; None waits indefinitely.
    :param session: Optional requests session to send through.
    :param api_key: Access token, only used to mask the URL in log output.
    :return: Decoded JSON for JSON output, the response text for CSV output.
    :raises requests.exceptions.RequestException: On any transport or HTTP failure.
    """
    safe_url = mask_credential(request.url, api_key)
    getter = session.get if session is not None else requests.get
    add_breadcrumb(f"GET {request.endpoint}", data={"url": safe_url})

    try:
        logger.info(f"Requesting {request.endpoint}")
        response = getter(request.url, headers=request.headers, timeout=timeout)
        response.raise_for_status()
        if request.output_format is OutputFormat.CSV:
            body = response.text
        else:
            body = response.json()
    except requests.Timeout as err:
        logger.error(f"Request to {request.endpoint} timed out after {timeout} seconds.")
        capture_exception(err, {"covalent": {"endpoint": request.endpoint, "url": safe_url}})
        raise
    except requests.RequestException as err:
        logger.error(f"Request to {request.endpoint} failed: {mask_credential(str(err), api_key)}")
        capture_exception(err, {"covalent": {"endpoint": request.endpoint, "url": safe_url}})
        raise

    logger.info(f"Received {request.endpoint} response with status {response.status_code}")
    return body
