"""
request_builder.py

Turns an endpoint name and a bag of keyword parameters into a ResolvedRequest.
Nothing here touches the network; every failure is raised before a URL exists.

Query parameters are emitted in a fixed order: the access token, the endpoint's own
parameters in declaration order, Primer, pagination, quote currency and format.
"""

import json
from datetime import date, datetime, timezone
from typing import Any, Dict, List, Optional, Tuple, Union
from urllib.parse import quote

from pydantic import ValidationError

from covalent_api.api.credentials import mask_credential, resolve_credential
from covalent_api.api.endpoints import EndpointSpec, ParamKind, ParamSpec, get_endpoint
from covalent_api.api.enums import OutputFormat, QuoteCurrency, SortOrder, coerce_enum
from covalent_api.api.exceptions import ParameterValidationError
from covalent_api.api.models import RequestParameters, ResolvedRequest
from covalent_api.utils.config import Config, get_config
from covalent_api.utils.logger import get_logger

logger = get_logger(__name__)

LIST_SEPARATOR = "%2C"
PRIMER_FIELDS = ("match", "group", "sort", "skip", "limit")
PAGINATION_FIELDS = (("page_number", "page-number"), ("page_size", "page-size"))
COMMON_FIELDS = ("quote_currency", "output_format")


def supported_fields(spec: EndpointSpec) -> Tuple[str, ...]:
    """Names of every keyword parameter the endpoint accepts."""
    fields = list(spec.fields)
    if spec.primer:
        fields.extend(PRIMER_FIELDS)
    if spec.pagination:
        fields.extend(name for name, _ in PAGINATION_FIELDS)
    fields.extend(name for name in COMMON_FIELDS if name not in fields)
    return tuple(fields)


def encode(value: str) -> str:
    return quote(value, safe="")


def encode_list(items: Optional[List[str]], lower: bool = False) -> Optional[str]:
    """Percent-encodes each item and joins them with an encoded comma; None for an empty list."""
    if not items:
        return None
    return LIST_SEPARATOR.join(encode(item.lower() if lower else item) for item in items)


def format_block_timestamp(value: Union[datetime, date]) -> str:
    """
    Renders a timestamp as ``yyyy-mm-ddTHH%3AMM%3ASSZ``.

    Aware datetimes are converted to UTC; naive ones and plain dates are taken as UTC.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
    else:
        value = datetime(value.year, value.month, value.day)
    return value.strftime("%Y-%m-%dT%H:%M:%SZ").replace(":", "%3A")


def encode_primer(value: Any) -> str:
    if isinstance(value, (dict, list)):
        value = json.dumps(value, separators=(",", ":"))
    return encode(str(value))


def render(param: ParamSpec, value: Any) -> Optional[str]:
    """
    Renders one endpoint parameter for the path or the query string.

    Returns None when the parameter should be left out.
    """
    if value is None:
        return param.default

    kind = param.kind
    if kind is ParamKind.INTEGER:
        return str(int(value))
    if kind is ParamKind.IDENTIFIER:
        return encode(value.strip().lower())
    if kind is ParamKind.LIST:
        return encode_list(value)
    if kind is ParamKind.IDENTIFIER_LIST:
        return encode_list(value, lower=True)
    if kind is ParamKind.PRICE_DATE:
        return value.strftime("%Y-%m-%d")
    if kind is ParamKind.BLOCK_TIMESTAMP:
        return format_block_timestamp(value)
    if kind is ParamKind.BLOCK:
        return str(value)
    if kind is ParamKind.FLAG:
        return "true" if value else "false"
    if kind is ParamKind.SORT:
        return "true" if value is SortOrder.ASCENDING else "false"
    if kind is ParamKind.QUOTE:
        return value.value.lower()
    raise ValueError(f"Unhandled parameter kind: {kind}")


def parse_parameters(params: Dict[str, Any]) -> RequestParameters:
    try:
        return RequestParameters(**params)
    except ValidationError as err:
        error = err.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "parameters"
        raise ParameterValidationError(
            field,
            f"Invalid value for '{field}': {error['msg']}",
            value=error.get("input"),
        ) from err


def resolve_quote_currency(spec: EndpointSpec, value: Any, config: Config) -> Optional[QuoteCurrency]:
    """Explicit argument, then the configured default, then the endpoint fallback."""
    if value is None:
        value = config.QUOTE_CURRENCY or spec.quote_currency_fallback
    if value is None:
        return None
    return coerce_enum(QuoteCurrency, value, "quote_currency")


def build_request(endpoint: Union[str, EndpointSpec], api_key: Optional[str] = None,
                  config: Optional[Config] = None, base_url: Optional[str] = None,
                  **params) -> ResolvedRequest:
    """
    Builds the GET request for one endpoint.

    :param endpoint: Operation name from the ENDPOINTS table, or an EndpointSpec.
    :param api_key: Access token; falls back to the configured COVALENT_API_KEY.
    :param config: Configuration supplying defaults; the global one when omitted.
    :param base_url: Overrides the configured base URL.
    :param params: Endpoint parameters, see RequestParameters.
    :return: The resolved request.
    :raises MissingCredentialError: If no access token is available.
    :raises ParameterValidationError: If a parameter is unknown, missing or invalid.
    :raises KeyError: If the endpoint name is unknown.
    """
    spec = endpoint if isinstance(endpoint, EndpointSpec) else get_endpoint(endpoint)
    config = config or get_config()
    key = resolve_credential(api_key, config.API_KEY)

    accepted = supported_fields(spec)
    for name in params:
        if name not in accepted:
            raise ParameterValidationError(
                name, f"Unsupported parameter '{name}' for {spec.name}", value=params[name]
            )

    quote_currency = params.pop("quote_currency", None)
    output_format = params.pop("output_format", None)
    sort_order = params.pop("sort_order", None)
    parameters = parse_parameters(params)

    for param in spec.params:
        if param.required and getattr(parameters, param.field) is None:
            raise ParameterValidationError(
                param.field, f"Missing required parameter '{param.field}' for {spec.name}"
            )

    resolved_quote = resolve_quote_currency(spec, quote_currency, config)
    if spec.quote_in_path and resolved_quote is None:
        raise ParameterValidationError(
            "quote_currency", f"Missing required parameter 'quote_currency' for {spec.name}"
        )
    resolved_format = coerce_enum(
        OutputFormat, output_format if output_format is not None else config.OUTPUT_FORMAT, "output_format"
    )
    if sort_order is not None:
        sort_order = coerce_enum(SortOrder, sort_order, "sort_order")
    parameters = parameters.model_copy(update={
        "quote_currency": resolved_quote,
        "output_format": resolved_format,
        "sort_order": sort_order,
    })

    path_values = {}
    query = [("key", encode(key))]
    for param in spec.params:
        rendered = render(param, getattr(parameters, param.field))
        if param.in_path:
            path_values[param.field] = rendered
        elif rendered is not None:
            query.append((param.query_name, rendered))

    if spec.primer:
        for name in PRIMER_FIELDS:
            value = getattr(parameters, name)
            if value is not None:
                query.append((name, encode_primer(value)))

    if spec.pagination:
        for field, query_name in PAGINATION_FIELDS:
            value = getattr(parameters, field)
            if value is not None:
                query.append((query_name, str(value)))

    if resolved_quote is not None and not spec.quote_in_path:
        query.append(("quote-currency", resolved_quote.value.lower()))
    query.append(("format", resolved_format.value.lower()))

    root = (base_url or config.BASE_URL).rstrip("/")
    url = f"{root}{spec.path.format(**path_values)}?" + "&".join(f"{name}={value}" for name, value in query)

    logger.debug(f"Built {spec.name} request: {mask_credential(url, key)}")
    return ResolvedRequest(endpoint=spec.name, url=url, output_format=resolved_format)
