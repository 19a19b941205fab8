"""
Covalent API endpoint definitions.

Every supported operation is one EndpointSpec in the ENDPOINTS table: the path
template, the parameters it takes and which common query flags it supports.
The table is built once at import time and never modified.
"""

from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from covalent_api.api.models import LATEST


class ParamKind(str, Enum):
    """How a parameter value is rendered into the URL."""
    INTEGER = "integer"                  # decimal integer
    IDENTIFIER = "identifier"            # trimmed, lower-cased
    LIST = "list"                        # comma list joined with %2C
    IDENTIFIER_LIST = "identifier_list"  # comma list, lower-cased items
    PRICE_DATE = "price_date"            # yyyy-mm-dd
    BLOCK_TIMESTAMP = "block_timestamp"  # yyyy-mm-ddTHH%3AMM%3ASSZ
    BLOCK = "block"                      # integer or "latest"
    FLAG = "flag"                        # true / false
    SORT = "sort"                        # SortOrder rendered as an ascending flag
    QUOTE = "quote"                      # resolved quote currency, lower-cased


@dataclass(frozen=True)
class ParamSpec:
    """
    One parameter of an endpoint.

    Attributes:
        field (str): RequestParameters attribute the value comes from.
        kind (ParamKind): Rendering rule.
        query_name (Optional[str]): Query key; None means the value fills the
            path placeholder named after ``field``.
        required (bool): Whether the caller must supply a value.
        default (Optional[str]): Literal rendered when the value is absent.
    """
    field: str
    kind: ParamKind
    query_name: Optional[str] = None
    required: bool = False
    default: Optional[str] = None

    @property
    def in_path(self) -> bool:
        return self.query_name is None


@dataclass(frozen=True)
class EndpointSpec:
    """
    Static descriptor of one remote operation.

    Attributes:
        name (str): Operation name, also the client method name.
        path (str): Template relative to the base URL, with {field} placeholders.
        params (Tuple[ParamSpec, ...]): Endpoint-specific parameters; query ones
            are emitted in this order.
        pagination (bool): Accepts page-number / page-size.
        primer (bool): Accepts the Primer match / group / sort / skip / limit keys.
        quote_currency_fallback (Optional[str]): Used when neither the caller nor the
            configuration names a quote currency; None omits the parameter.
        description (str): One-line summary.
    """
    name: str
    path: str
    params: Tuple[ParamSpec, ...] = ()
    pagination: bool = True
    primer: bool = True
    quote_currency_fallback: Optional[str] = "USD"
    description: str = ""

    @property
    def quote_in_path(self) -> bool:
        return any(param.kind is ParamKind.QUOTE for param in self.params)

    @property
    def fields(self) -> Tuple[str, ...]:
        return tuple(param.field for param in self.params)


def _path(field: str, kind: ParamKind = ParamKind.IDENTIFIER, default: Optional[str] = None) -> ParamSpec:
    return ParamSpec(field, kind, required=default is None, default=default)


def _query(field: str, query_name: str, kind: ParamKind, required: bool = False,
           default: Optional[str] = None) -> ParamSpec:
    return ParamSpec(field, kind, query_name=query_name, required=required, default=default)


CHAIN = _path("chain_id", ParamKind.INTEGER)
ADDRESS = _path("address")
CONTRACT = _path("contract_address")
DEX = _path("dex_name")
QUOTE = ParamSpec("quote_currency", ParamKind.QUOTE)
TICKERS = _query("tickers", "tickers", ParamKind.LIST)
PRICE_RANGE = (
    _query("start_date", "from", ParamKind.PRICE_DATE),
    _query("end_date", "to", ParamKind.PRICE_DATE),
    _query("sort_order", "prices-at-asc", ParamKind.SORT),
)
STARTING_BLOCK = _query("starting_block", "starting-block", ParamKind.BLOCK, required=True)
ENDING_BLOCK = _query("ending_block", "ending-block", ParamKind.BLOCK, default=LATEST)
NO_LOGS = _query("no_logs", "no-logs", ParamKind.FLAG)
SWAPS = _query("swaps_insight", "swaps", ParamKind.FLAG)


def _protocol_endpoints(protocol: str, chain_id: int, balances: Optional[str] = None,
                        activity: Optional[str] = None, assets: Optional[str] = None,
                        asset_by_address: Optional[str] = None, swaps: bool = False,
                        ) -> Tuple[EndpointSpec, ...]:
    """Fixed-chain snapshots of one DeFi protocol; only the operations named get an entry."""
    specs = []
    if balances:
        specs.append(EndpointSpec(
            balances, f"/{chain_id}/address/{{address}}/stacks/{protocol}/balances/", (ADDRESS,),
            description=f"{protocol} balances and liquidity held by an address.",
        ))
    if activity:
        specs.append(EndpointSpec(
            activity, f"/{chain_id}/address/{{address}}/stacks/{protocol}/acts/",
            (ADDRESS, SWAPS) if swaps else (ADDRESS,),
            description=f"{protocol} activity of an address.",
        ))
    if assets:
        specs.append(EndpointSpec(
            assets, f"/{chain_id}/networks/{protocol}/assets/", (TICKERS,),
            description=f"Assets listed on {protocol}.",
        ))
    if asset_by_address:
        specs.append(EndpointSpec(
            asset_by_address, f"/{chain_id}/networks/{protocol}/assets/{{address}}/", (ADDRESS,),
            description=f"One {protocol} asset by its contract address.",
        ))
    return tuple(specs)


_SPECS = (
    # Pricing
    EndpointSpec(
        "get_spot_prices", "/pricing/tickers/", (TICKERS,),
        description="Spot prices, optionally limited to a ticker list.",
    ),
    EndpointSpec(
        "get_historical_prices_by_ticker", "/pricing/historical/{quote_currency}/{ticker}/",
        (QUOTE, _path("ticker")) + PRICE_RANGE,
        description="Daily price history of one ticker.",
    ),
    EndpointSpec(
        "get_historical_prices_by_address",
        "/pricing/historical_by_address/{chain_id}/{quote_currency}/{contract_address}/",
        (CHAIN, QUOTE, CONTRACT) + PRICE_RANGE,
        description="Daily price history of one token contract.",
    ),
    EndpointSpec(
        "get_historical_prices_by_addresses",
        "/pricing/historical_by_addresses/{chain_id}/{quote_currency}/{contract_addresses}/",
        (CHAIN, QUOTE, _path("contract_addresses", ParamKind.IDENTIFIER_LIST)) + PRICE_RANGE,
        description="Daily price history of several token contracts.",
    ),
    EndpointSpec(
        "get_historical_prices_by_addresses_v2",
        "/pricing/historical_by_addresses_v2/{chain_id}/{quote_currency}/{contract_addresses}/",
        (CHAIN, QUOTE, _path("contract_addresses", ParamKind.IDENTIFIER_LIST)) + PRICE_RANGE,
        description="Daily price history of several token contracts, v2 response shape.",
    ),
    EndpointSpec(
        "get_price_volatility", "/pricing/volatility/", (TICKERS,),
        description="Price volatility, optionally limited to a ticker list.",
    ),

    # Address
    EndpointSpec(
        "get_token_balances", "/{chain_id}/address/{address}/balances_v2/",
        (CHAIN, ADDRESS,
         _query("include_nft", "nft", ParamKind.FLAG),
         _query("no_nft_fetch", "no-nft-fetch", ParamKind.FLAG)),
        description="Token balances of an address, optionally including NFTs.",
    ),
    EndpointSpec(
        "get_historical_portfolio", "/{chain_id}/address/{address}/portfolio_v2/", (CHAIN, ADDRESS),
        description="Daily portfolio value of an address.",
    ),
    EndpointSpec(
        "get_transactions", "/{chain_id}/address/{address}/transactions_v2/",
        (CHAIN, ADDRESS, _query("sort_order", "block-signed-at-asc", ParamKind.SORT), NO_LOGS),
        description="Transactions of an address.",
    ),
    EndpointSpec(
        "get_erc20_transfers", "/{chain_id}/address/{address}/transfers_v2/",
        (CHAIN, ADDRESS,
         _query("contract_address", "contract-address", ParamKind.IDENTIFIER, required=True),
         _query("starting_block", "starting-block", ParamKind.BLOCK),
         _query("ending_block", "ending-block", ParamKind.BLOCK)),
        description="ERC-20 transfers of an address for one token contract.",
    ),
    EndpointSpec(
        "get_transaction", "/{chain_id}/transaction_v2/{tx_hash}/", (CHAIN, _path("tx_hash"), NO_LOGS),
        pagination=False, primer=False,
        description="One transaction by hash.",
    ),

    # Blocks
    EndpointSpec(
        "get_block", "/{chain_id}/block_v2/{block_height}/",
        (CHAIN, _path("block_height", ParamKind.BLOCK, default=LATEST)),
        pagination=False, primer=False,
        description="One block by height, or the latest block.",
    ),
    EndpointSpec(
        "get_block_heights", "/{chain_id}/block_v2/{start_date}/{end_date}/",
        (CHAIN, _path("start_date", ParamKind.BLOCK_TIMESTAMP),
         _path("end_date", ParamKind.BLOCK_TIMESTAMP, default=LATEST)),
        description="Block heights produced within a date range.",
    ),

    # Log events
    EndpointSpec(
        "get_log_events_by_contract", "/{chain_id}/events/address/{contract_address}/",
        (CHAIN, CONTRACT, STARTING_BLOCK, ENDING_BLOCK),
        description="Log events emitted by one contract.",
    ),
    EndpointSpec(
        "get_log_events_by_topic", "/{chain_id}/events/topics/{topic}/",
        (CHAIN, _path("topic"), STARTING_BLOCK, ENDING_BLOCK,
         _query("secondary_topics", "secondary-topics", ParamKind.IDENTIFIER_LIST),
         _query("sender_address", "sender-address", ParamKind.IDENTIFIER)),
        description="Log events matching a topic hash, optionally filtered by sender.",
    ),

    # NFTs and token contracts
    EndpointSpec(
        "get_nft_external_metadata", "/{chain_id}/tokens/{contract_address}/nft_metadata/{token_id}/",
        (CHAIN, CONTRACT, _path("token_id")),
        pagination=False, primer=False,
        description="External metadata of one NFT.",
    ),
    EndpointSpec(
        "get_nft_token_ids", "/{chain_id}/tokens/{contract_address}/nft_token_ids/", (CHAIN, CONTRACT),
        description="Token IDs minted by an NFT contract.",
    ),
    EndpointSpec(
        "get_nft_transactions", "/{chain_id}/tokens/{contract_address}/nft_transactions/{token_id}/",
        (CHAIN, CONTRACT, _path("token_id")),
        description="Transfer history of one NFT.",
    ),
    EndpointSpec(
        # contract_id is free text; "all" lists every contract
        "get_contract_metadata", "/{chain_id}/tokens/tokenlists/{contract_id}/",
        (CHAIN, _path("contract_id")),
        description="Token contract metadata, for one contract or 'all'.",
    ),
    EndpointSpec(
        "get_token_holders", "/{chain_id}/tokens/{contract_address}/token_holders/",
        (CHAIN, CONTRACT, _query("block_height", "block-height", ParamKind.BLOCK)),
        description="Holders of a token as of a block height.",
    ),
    EndpointSpec(
        "get_token_holders_changes", "/{chain_id}/tokens/{contract_address}/token_holders_changes/",
        (CHAIN, CONTRACT, STARTING_BLOCK, ENDING_BLOCK),
        description="Holder balance changes between two block heights.",
    ),

    # Chains
    EndpointSpec(
        "get_all_chains", "/chains/", pagination=False, primer=False,
        description="Supported chains.",
    ),
    EndpointSpec(
        "get_all_chain_statuses", "/chains/status/", pagination=False, primer=False,
        description="Synchronisation status of every supported chain.",
    ),

    # XY=K decentralised exchanges
    EndpointSpec(
        "get_xyk_pools", "/{chain_id}/xy=k/{dex_name}/pools/", (CHAIN, DEX, TICKERS),
        description="Liquidity pools of a DEX.",
    ),
    EndpointSpec(
        "get_xyk_pool_by_address", "/{chain_id}/xy=k/{dex_name}/pools/address/{address}/",
        (CHAIN, DEX, ADDRESS),
        description="One liquidity pool by address.",
    ),
    EndpointSpec(
        "get_xyk_address_exchange_balances", "/{chain_id}/xy=k/{dex_name}/address/{address}/balances/",
        (CHAIN, DEX, ADDRESS),
        description="DEX liquidity positions of an address.",
    ),
    EndpointSpec(
        "get_xyk_network_exchange_tokens", "/{chain_id}/xy=k/{dex_name}/tokens/", (CHAIN, DEX, TICKERS),
        description="Tokens traded on a DEX.",
    ),
    EndpointSpec(
        "get_xyk_token_transactions", "/{chain_id}/xy=k/{dex_name}/tokens/address/{address}/transactions/",
        (CHAIN, DEX, ADDRESS),
        description="DEX transactions of one token.",
    ),
    EndpointSpec(
        "get_xyk_ecosystem_chart_data", "/{chain_id}/xy=k/{dex_name}/ecosystem/", (CHAIN, DEX),
        description="Aggregate volume and liquidity chart data of a DEX.",
    ),
    EndpointSpec(
        "get_xyk_health_data", "/{chain_id}/xy=k/{dex_name}/health/", (CHAIN, DEX),
        description="Indexing health of a DEX.",
    ),
) + _protocol_endpoints(
    "uniswap_v2", 1,
    balances="get_uniswap_v2_address_exchange_liquidity",
    activity="get_uniswap_v2_address_exchange_activity",
    swaps=True,
    assets="get_uniswap_v2_network_assets",
    asset_by_address="get_uniswap_v2_network_asset_by_address",
) + _protocol_endpoints(
    "sushiswap", 1,
    balances="get_sushiswap_address_exchange_liquidity",
    activity="get_sushiswap_address_exchange_activity",
    swaps=True,
    assets="get_sushiswap_network_assets",
) + _protocol_endpoints(
    "aave_v2", 1, balances="get_aave_v2_address_balances",
) + _protocol_endpoints(
    "aave", 1, balances="get_aave_address_balances",
) + _protocol_endpoints(
    "compound", 1, balances="get_compound_address_balances", activity="get_compound_address_activity",
) + _protocol_endpoints(
    "balancer", 1, balances="get_balancer_address_balances",
) + _protocol_endpoints(
    "curve", 1, balances="get_curve_address_balances",
) + _protocol_endpoints(
    "pancakeswap_v2", 56,
    balances="get_pancakeswap_v2_address_balances",
    assets="get_pancakeswap_v2_network_assets",
) + _protocol_endpoints(
    "quickswap", 137,
    balances="get_quickswap_address_balances",
    assets="get_quickswap_network_assets",
)

ENDPOINTS: Mapping[str, EndpointSpec] = MappingProxyType({spec.name: spec for spec in _SPECS})


def get_endpoint(name: str) -> EndpointSpec:
    """
    Looks up an endpoint by operation name.

    :raises KeyError: If no endpoint has that name.
    """
    try:
        return ENDPOINTS[name]
    except KeyError:
        raise KeyError(f"Unknown Covalent endpoint '{name}'") from None
