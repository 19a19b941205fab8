"""
API Module

Request building and HTTP access for the Covalent blockchain data API.
"""

from covalent_api.api.covalent_api import CovalentAPI
from covalent_api.api.credentials import ensure_credential
from covalent_api.api.endpoints import ENDPOINTS, EndpointSpec, ParamKind, ParamSpec, get_endpoint
from covalent_api.api.enums import OutputFormat, QuoteCurrency, SortOrder
from covalent_api.api.exceptions import (
    CovalentAPIError,
    MissingCredentialError,
    ParameterValidationError,
    TransportError,
)
from covalent_api.api.models import RequestParameters, ResolvedRequest
from covalent_api.api.request_builder import build_request

__all__ = [
    'CovalentAPI',
    'ensure_credential',
    'ENDPOINTS',
    'EndpointSpec',
    'ParamKind',
    'ParamSpec',
    'get_endpoint',
    'OutputFormat',
    'QuoteCurrency',
    'SortOrder',
    'CovalentAPIError',
    'MissingCredentialError',
    'ParameterValidationError',
    'TransportError',
    'RequestParameters',
    'ResolvedRequest',
    'build_request',
]
