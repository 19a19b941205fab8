"""
Client binding for the Covalent blockchain data API.
"""

__version__ = "0.1.0"

from covalent_api.api import (  # noqa: E402
    ENDPOINTS,
    CovalentAPI,
    CovalentAPIError,
    MissingCredentialError,
    OutputFormat,
    ParameterValidationError,
    QuoteCurrency,
    SortOrder,
    TransportError,
    build_request,
)
from covalent_api.utils.config import Config, get_config  # noqa: E402

__all__ = [
    '__version__',
    'ENDPOINTS',
    'CovalentAPI',
    'CovalentAPIError',
    'MissingCredentialError',
    'OutputFormat',
    'ParameterValidationError',
    'QuoteCurrency',
    'SortOrder',
    'TransportError',
    'build_request',
    'Config',
    'get_config',
]
