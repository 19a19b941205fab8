"""
Pydantic models for request parameters and resolved requests.

RequestParameters is the per-call argument bag. It normalises what callers pass
(trimmed strings, comma lists, dates, block heights) but does not know which
endpoint the values are for; the request builder decides which fields are
required and how each one is rendered.
"""

from datetime import date, datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from covalent_api.api.enums import OutputFormat, QuoteCurrency, SortOrder

LATEST = "latest"

JSON_CONTENT_TYPE = "application/json"


def split_list(value: Any) -> Optional[List[str]]:
    """
    Normalises a comma-separated string or a sequence into a list of trimmed items.

    Empty and None items are dropped; a list with nothing left in it becomes None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        raw_items = value.split(",")
    elif isinstance(value, (list, tuple, set)):
        raw_items = []
        for item in value:
            if item is None:
                continue
            if not isinstance(item, (str, int)):
                raise ValueError("list items must be strings")
            raw_items.extend(str(item).split(","))
    else:
        raise ValueError("must be a comma-separated string or a list of strings")

    items = [item.strip() for item in raw_items if item.strip()]
    return items or None


def parse_date(value: Any) -> Optional[Union[datetime, date]]:
    """Accepts date/datetime objects or ISO 8601 strings such as '2021-04-01' and '2021-04-01T00:00:00Z'."""
    if value is None or isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str):
        raise ValueError("must be a date, a datetime or an ISO 8601 string")

    text = value.strip()
    if not text:
        return None
    try:
        if "T" not in text and " " not in text:
            return date.fromisoformat(text)
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return datetime.fromisoformat(text)
    except ValueError:
        raise ValueError(f"'{value}' is not an ISO 8601 date or timestamp")


class RequestParameters(BaseModel):
    """
    Typed argument bag for a single API call.

    Attributes cover every parameter any endpoint accepts. Unknown names are
    rejected.
    """
    model_config = ConfigDict(extra="forbid")

    chain_id: Optional[int] = Field(None, ge=0, description="Numeric chain identifier")
    address: Optional[str] = Field(None, description="Wallet or contract address, or ENS name")
    contract_address: Optional[str] = None
    contract_addresses: Optional[List[str]] = None
    contract_id: Optional[str] = Field(None, description="Contract address or the 'all' sentinel")
    tx_hash: Optional[str] = None
    ticker: Optional[str] = None
    tickers: Optional[List[str]] = None
    token_id: Optional[str] = None
    topic: Optional[str] = None
    secondary_topics: Optional[List[str]] = None
    sender_address: Optional[str] = None
    dex_name: Optional[str] = None

    start_date: Optional[Union[datetime, date]] = None
    end_date: Optional[Union[datetime, date]] = None
    block_height: Optional[Union[int, str]] = None
    starting_block: Optional[Union[int, str]] = None
    ending_block: Optional[Union[int, str]] = None

    sort_order: Optional[SortOrder] = None
    include_nft: Optional[bool] = None
    no_nft_fetch: Optional[bool] = None
    no_logs: Optional[bool] = None
    swaps_insight: Optional[bool] = None

    page_number: Optional[int] = Field(None, ge=0)
    page_size: Optional[int] = Field(None, gt=0)

    # Primer
    match: Optional[Any] = None
    group: Optional[Any] = None
    sort: Optional[Any] = None
    skip: Optional[int] = Field(None, ge=0)
    limit: Optional[int] = Field(None, gt=0)

    quote_currency: Optional[QuoteCurrency] = None
    output_format: Optional[OutputFormat] = None

    @field_validator(
        "address", "contract_address", "contract_id", "tx_hash", "ticker", "token_id",
        "topic", "sender_address", "dex_name", mode="before",
    )
    @classmethod
    def strip_text(cls, value):
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError("must be a string")
        if isinstance(value, int):
            return str(value)
        if not isinstance(value, str):
            raise ValueError("must be a string")
        return value.strip() or None

    @field_validator("tickers", "contract_addresses", "secondary_topics", mode="before")
    @classmethod
    def normalise_list(cls, value):
        return split_list(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def normalise_date(cls, value):
        return parse_date(value)

    @field_validator("block_height", "starting_block", "ending_block", mode="before")
    @classmethod
    def normalise_block(cls, value):
        if value is None:
            return None
        if isinstance(value, bool):
            raise ValueError(f"must be a non-negative integer or '{LATEST}'")
        if isinstance(value, str):
            text = value.strip().lower()
            if not text:
                return None
            if text == LATEST:
                return LATEST
            if text.isdigit():
                return int(text)
            raise ValueError(f"must be a non-negative integer or '{LATEST}'")
        if isinstance(value, int) and value >= 0:
            return value
        raise ValueError(f"must be a non-negative integer or '{LATEST}'")


class ResolvedRequest(BaseModel):
    """A fully-formed GET request. The content type is JSON whatever output format was asked for."""
    model_config = ConfigDict(frozen=True)

    endpoint: str
    url: str
    method: str = "GET"
    content_type: str = JSON_CONTENT_TYPE
    output_format: OutputFormat = OutputFormat.JSON

    @property
    def headers(self) -> Dict[str, str]:
        return {"Content-Type": self.content_type}
