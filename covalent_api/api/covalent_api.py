"""
covalent_api.py

CovalentAPI exposes one method per entry of the ENDPOINTS table. Each method builds
the request locally (credential and parameter checks first) and then performs a
single GET, returning the response body as the service sent it.
"""

from typing import Any, Optional

import requests

from covalent_api.api.credentials import resolve_credential
from covalent_api.api.endpoints import ENDPOINTS, EndpointSpec
from covalent_api.api.models import ResolvedRequest
from covalent_api.api.request_builder import build_request, supported_fields
from covalent_api.api.transport import execute
from covalent_api.utils.config import Config, get_config
from covalent_api.utils.logger import get_logger

logger = get_logger(__name__)


class CovalentAPI:
    """
    CovalentAPI handles communication with the Covalent API.

    Operations are generated from the endpoint table, e.g.
    ``CovalentAPI().get_token_balances(chain_id=1, address="demo.eth")``.
    """

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 config: Optional[Config] = None, session: Optional[requests.Session] = None):
        """
        Initializes the client.

        :param api_key: Default access token for every call; falls back to COVALENT_API_KEY.
        :param base_url: The base URL for the Covalent API.
        :param config: Configuration providing defaults; the global one when omitted.
        :param session: Optional requests session used for all calls.
        """
        self.config = config or get_config()
        self.api_key = api_key if api_key is not None else self.config.API_KEY
        self.base_url = (base_url or self.config.BASE_URL).rstrip("/")
        self.session = session

        logger.info(f"CovalentAPI initialized for {self.base_url}")

    def build_request(self, endpoint: str, api_key: Optional[str] = None, **params) -> ResolvedRequest:
        """Resolves the request for ``endpoint`` without sending it."""
        return build_request(
            endpoint,
            api_key=api_key if api_key is not None else self.api_key,
            config=self.config,
            base_url=self.base_url,
            **params
        )

    def request(self, endpoint: str, api_key: Optional[str] = None, **params) -> Any:
        """
        Builds and sends the request for ``endpoint``.

        :return: Decoded JSON, or the raw text when CSV output was requested.
        :raises MissingCredentialError: If no access token is available.
        :raises ParameterValidationError: If a parameter is unknown, missing or invalid.
        :raises requests.exceptions.RequestException: If the transport or the service fails.
        """
        key = api_key if api_key is not None else self.api_key
        resolved = self.build_request(endpoint, api_key=key, **params)
        return execute(
            resolved,
            timeout=self.config.REQUEST_TIMEOUT,
            session=self.session,
            api_key=resolve_credential(key, self.config.API_KEY),
        )


def _operation(spec: EndpointSpec):
    def operation(self, api_key: Optional[str] = None, **params):
        return self.request(spec.name, api_key=api_key, **params)

    operation.__name__ = spec.name
    operation.__qualname__ = f"CovalentAPI.{spec.name}"
    operation.__doc__ = (
        f"{spec.description}\n\n"
        f"GET {spec.path}\n\n"
        f"Accepted parameters: api_key, {', '.join(supported_fields(spec))}"
    )
    return operation


for _spec in ENDPOINTS.values():
    setattr(CovalentAPI, _spec.name, _operation(_spec))
