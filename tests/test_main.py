"""
test_main.py

Tests for the command-line entry point.
"""

import json
import pytest
import requests
from unittest.mock import patch

from covalent_api.main import EXIT_TRANSPORT_ERROR, EXIT_USAGE_ERROR, main, parse_params
from conftest import BASE, TEST_KEY


@pytest.fixture(autouse=True)
def no_sentry():
    """Keep the command line from touching the real Sentry setup"""
    with patch('covalent_api.main.init_sentry'), patch('covalent_api.main.close_sentry'):
        yield


@pytest.fixture
def cli_config(config):
    with patch('covalent_api.main.get_config', return_value=config):
        yield config


@pytest.fixture
def keyless_cli_config(keyless_config):
    with patch('covalent_api.main.get_config', return_value=keyless_config):
        yield keyless_config


class TestParseParams:
    """Tests for name=value parsing"""

    def test_pairs(self):
        assert parse_params(["chain_id=1", "page-size=10", "match={\"a\":1}"]) == {
            "chain_id": "1",
            "page_size": "10",
            "match": "{\"a\":1}",
        }

    def test_value_may_contain_equals(self):
        assert parse_params(["tickers=a=b"]) == {"tickers": "a=b"}

    @pytest.mark.parametrize("pair", ["chain_id", "=1"])
    def test_invalid_pair(self, pair):
        with pytest.raises(ValueError):
            parse_params([pair])

    @pytest.mark.parametrize("pair", ["config=x", "base_url=http://evil", "base-url=x", "endpoint=get_block", "self=1"])
    def test_reserved_names_rejected(self, pair):
        with pytest.raises(ValueError) as exc_info:
            parse_params(["chain_id=1", pair])
        assert "not an endpoint parameter" in str(exc_info.value)

    @pytest.mark.parametrize("pair", ["api_key=ckey_x", "api-key=ckey_x"])
    def test_key_pair_points_to_option(self, pair):
        with pytest.raises(ValueError) as exc_info:
            parse_params([pair])
        assert "--api-key" in str(exc_info.value)
        assert "ckey_x" not in str(exc_info.value)


class TestMain:
    """Tests for main()"""

    def test_list(self, capsys):
        assert main(["--list"]) == 0

        output = capsys.readouterr().out
        assert "get_block\t" in output
        assert "get_spot_prices\t" in output

    def test_no_endpoint(self, capsys):
        assert main([]) == EXIT_USAGE_ERROR

    def test_unknown_endpoint(self, capsys):
        assert main(["get_everything"]) == EXIT_USAGE_ERROR
        assert "Unknown endpoint" in capsys.readouterr().err

    def test_dry_run_masks_key(self, cli_config, capsys):
        assert main(["get_block", "chain_id=1", "--dry-run"]) == 0

        output = capsys.readouterr().out.strip()
        assert output == f"{BASE}/1/block_v2/latest/?key=***&quote-currency=usd&format=json"
        assert TEST_KEY not in output

    def test_dry_run_with_options(self, cli_config, capsys):
        argv = [
            "get_spot_prices", "tickers=TRIBE, MATIC", "--quote-currency", "EUR",
            "--format", "CSV", "--api-key", "ckey_cli", "--dry-run",
        ]

        assert main(argv) == 0
        assert capsys.readouterr().out.strip() == (
            f"{BASE}/pricing/tickers/?key=***&tickers=TRIBE%2CMATIC&quote-currency=eur&format=csv"
        )

    def test_missing_credential(self, keyless_cli_config, capsys):
        assert main(["get_block", "chain_id=1", "--dry-run"]) == EXIT_USAGE_ERROR
        assert "COVALENT_API_KEY" in capsys.readouterr().err

    def test_invalid_parameter(self, cli_config, capsys):
        assert main(["get_block", "chain_id=1", "--quote-currency", "usd"]) == EXIT_USAGE_ERROR
        assert "quote_currency" in capsys.readouterr().err

    def test_malformed_pair(self, cli_config, capsys):
        assert main(["get_block", "chain_id"]) == EXIT_USAGE_ERROR

    @pytest.mark.parametrize("pair", ["config=x", "base_url=x", "endpoint=x", "api_key=x"])
    def test_reserved_pair_is_a_usage_error(self, pair, cli_config, capsys):
        assert main(["get_block", "chain_id=1", pair, "--dry-run"]) == EXIT_USAGE_ERROR
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err

    def test_dry_run_masks_encoded_key(self, cli_config, capsys):
        assert main(["get_all_chains", "--api-key", "ckey_a+b/c", "--dry-run"]) == 0

        output = capsys.readouterr().out.strip()
        assert output == f"{BASE}/chains/?key=***&quote-currency=usd&format=json"

    @patch('covalent_api.api.transport.requests.get')
    def test_prints_json_response(self, mock_get, cli_config, capsys):
        mock_get.return_value.json.return_value = {"data": {"items": [{"height": 1}]}}
        mock_get.return_value.status_code = 200

        assert main(["get_block", "chain_id=1"]) == 0

        assert json.loads(capsys.readouterr().out) == {"data": {"items": [{"height": 1}]}}

    @patch('covalent_api.api.transport.requests.get')
    def test_transport_error(self, mock_get, cli_config, capsys):
        mock_get.side_effect = requests.ConnectionError(f"failed for key={TEST_KEY}")

        assert main(["get_all_chains"]) == EXIT_TRANSPORT_ERROR

        error = capsys.readouterr().err
        assert "Request failed" in error
        assert TEST_KEY not in error
