import logging
import pytest
import requests
from unittest.mock import Mock, patch
from requests.exceptions import HTTPError

from covalent_api.api.covalent_api import CovalentAPI
from covalent_api.api.endpoints import ENDPOINTS
from covalent_api.api.exceptions import MissingCredentialError, ParameterValidationError, TransportError
from conftest import BASE, TEST_KEY


@pytest.fixture
def api(config):
    return CovalentAPI(config=config)


@patch('covalent_api.api.transport.requests.get')
def test_get_token_balances(mock_get, api):
    # Mock the API response
    mock_get.return_value.json.return_value = {
        "data": {
            "address": "0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae",
            "items": [{"contract_ticker_symbol": "ETH", "balance": "100"}],
        },
        "error": False,
    }
    mock_get.return_value.status_code = 200

    body = api.get_token_balances(chain_id=1, address="0xDE0B295669a9FD93d5F28D9Ec85E40f4cb697BAe")

    assert body["data"]["items"][0]["contract_ticker_symbol"] == "ETH"
    mock_get.assert_called_once_with(
        f"{BASE}/1/address/0xde0b295669a9fd93d5f28d9ec85e40f4cb697bae/balances_v2/"
        f"?key={TEST_KEY}&quote-currency=usd&format=json",
        headers={"Content-Type": "application/json"},
        timeout=30,
    )


@patch('covalent_api.api.transport.requests.get')
def test_csv_output_returns_text(mock_get, api):
    mock_get.return_value.text = "contract_ticker_symbol,quote_rate\nETH,3000\n"
    mock_get.return_value.status_code = 200

    body = api.get_spot_prices(tickers="ETH", output_format="CSV")

    assert body.startswith("contract_ticker_symbol")
    mock_get.return_value.json.assert_not_called()
    args, kwargs = mock_get.call_args
    assert args[0].endswith("&format=csv")
    assert kwargs["headers"] == {"Content-Type": "application/json"}


@patch('covalent_api.api.transport.requests.get')
def test_http_error_propagates(mock_get, api):
    mock_get.return_value.status_code = 401
    mock_get.return_value.raise_for_status.side_effect = HTTPError("401 Client Error")

    with pytest.raises(TransportError):
        api.get_block(chain_id=1)
    mock_get.return_value.json.assert_not_called()


@patch('covalent_api.api.transport.requests.get')
def test_timeout_propagates(mock_get, api):
    mock_get.side_effect = requests.Timeout("timed out")

    with pytest.raises(requests.Timeout):
        api.get_all_chains()
    assert mock_get.call_count == 1


@patch('covalent_api.api.transport.requests.get')
def test_malformed_json_propagates(mock_get, api):
    mock_get.return_value.status_code = 200
    mock_get.return_value.json.side_effect = requests.exceptions.JSONDecodeError("Expecting value", "", 0)

    with pytest.raises(TransportError):
        api.get_all_chain_statuses()


@patch('covalent_api.api.transport.requests.get')
def test_missing_credential_prevents_request(mock_get, keyless_config):
    api = CovalentAPI(config=keyless_config)

    with pytest.raises(MissingCredentialError):
        api.get_spot_prices(tickers="ETH")
    mock_get.assert_not_called()


@patch('covalent_api.api.transport.requests.get')
def test_validation_error_prevents_request(mock_get, api):
    with pytest.raises(ParameterValidationError):
        api.get_transactions(chain_id=1)
    mock_get.assert_not_called()


@patch('covalent_api.api.transport.requests.get')
def test_per_call_key_overrides_client_key(mock_get, keyless_config):
    mock_get.return_value.json.return_value = {"data": {}}
    api = CovalentAPI(api_key="ckey_client", config=keyless_config)

    api.get_all_chains(api_key="ckey_call")

    assert "key=ckey_call&" in mock_get.call_args[0][0]


def test_session_is_used(config):
    session = Mock()
    session.get.return_value.json.return_value = {"data": {"items": []}}
    api = CovalentAPI(config=config, session=session)

    api.get_nft_token_ids(chain_id=1, contract_address="0xC", page_size=5)

    session.get.assert_called_once()
    assert "&page-size=5&" in session.get.call_args[0][0]


def test_build_request_does_not_send(config):
    api = CovalentAPI(base_url="https://proxy.example.com/v1/", config=config)

    with patch('covalent_api.api.transport.requests.get') as mock_get:
        request = api.build_request("get_block", chain_id=1)
    mock_get.assert_not_called()
    assert request.url == f"https://proxy.example.com/v1/1/block_v2/latest/?key={TEST_KEY}&quote-currency=usd&format=json"


def test_every_endpoint_has_a_method(api):
    for name in ENDPOINTS:
        method = getattr(api, name)
        assert callable(method)
        assert method.__name__ == name
        assert ENDPOINTS[name].path in method.__doc__


@patch('covalent_api.api.transport.add_breadcrumb')
@patch('covalent_api.api.transport.requests.get')
def test_breadcrumb_masks_percent_encoded_key(mock_get, mock_breadcrumb, keyless_config):
    mock_get.return_value.json.return_value = {"data": {"items": []}}
    api = CovalentAPI(api_key="ckey_a+b/c", config=keyless_config)

    api.get_all_chains()

    assert "key=ckey_a%2Bb%2Fc&" in mock_get.call_args[0][0]
    url = mock_breadcrumb.call_args.kwargs["data"]["url"]
    assert url == f"{BASE}/chains/?key=***&quote-currency=usd&format=json"
    assert "ckey_a" not in url


@patch('covalent_api.api.transport.capture_exception')
@patch('covalent_api.api.transport.requests.get')
def test_failure_is_reported_with_masked_context(mock_get, mock_capture, api):
    error = HTTPError("500 Server Error")
    mock_get.return_value.raise_for_status.side_effect = error

    with pytest.raises(TransportError):
        api.get_block(chain_id=1)

    mock_capture.assert_called_once_with(
        error,
        {"covalent": {
            "endpoint": "get_block",
            "url": f"{BASE}/1/block_v2/latest/?key=***&quote-currency=usd&format=json",
        }},
    )


@patch('covalent_api.api.transport.capture_exception')
@patch('covalent_api.api.transport.requests.get')
def test_timeout_is_reported_with_masked_context(mock_get, mock_capture, api):
    error = requests.Timeout("timed out")
    mock_get.side_effect = error

    with pytest.raises(requests.Timeout):
        api.get_all_chain_statuses()

    context = mock_capture.call_args[0][1]["covalent"]
    assert context["endpoint"] == "get_all_chain_statuses"
    assert TEST_KEY not in context["url"]
    assert "key=***&" in context["url"]


@patch('covalent_api.api.transport.requests.get')
def test_logs_never_contain_the_key(mock_get, keyless_config, caplog):
    key = "ckey_a+b/c"
    url = f"{BASE}/1/block_v2/latest/?key=ckey_a%2Bb%2Fc&quote-currency=usd&format=json"
    mock_get.return_value.raise_for_status.side_effect = HTTPError(
        f"401 Client Error: Unauthorized for url: {url}"
    )
    api = CovalentAPI(api_key=key, config=keyless_config)
    caplog.set_level(logging.DEBUG, logger="covalent_api.api.request_builder")
    caplog.set_level(logging.DEBUG, logger="covalent_api.api.transport")

    with pytest.raises(TransportError):
        api.get_block(chain_id=1)

    assert "Built get_block request:" in caplog.text
    assert "Request to get_block failed:" in caplog.text
    assert "key=***&" in caplog.text
    assert "ckey_a" not in caplog.text
