"""
Access token resolution and validation.
"""

from typing import Optional
from urllib.parse import quote

from covalent_api.api.exceptions import MissingCredentialError
from covalent_api.utils.logger import get_logger

logger = get_logger(__name__)


def ensure_credential(api_key: Optional[str]) -> str:
    """
    Checks that an access token is present.

    :param api_key: Candidate token, possibly None or blank.
    :return: The token with surrounding whitespace removed.
    :raises MissingCredentialError: If the token is None, empty or whitespace-only.
    """
    if api_key is None or not isinstance(api_key, str) or not api_key.strip():
        raise MissingCredentialError()
    logger.debug("API key present")
    return api_key.strip()


def resolve_credential(api_key: Optional[str], configured_key: Optional[str]) -> str:
    """Explicit key first, configured key second; the winner must pass ensure_credential."""
    candidate = api_key if isinstance(api_key, str) and api_key.strip() else configured_key
    return ensure_credential(candidate)


def mask_credential(text: str, api_key: str) -> str:
    """Replaces the access token, raw or percent-encoded, in ``text`` so it can be logged."""
    if not api_key:
        return text
    for form in (quote(api_key, safe=""), api_key):
        text = text.replace(form, "***")
    return text
