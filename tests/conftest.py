"""
Pytest fixtures for the sequence-tx tests.
"""
import json
from unittest.mock import MagicMock

import pytest
from eth_abi import encode as abi_encode
from eth_account import Account
from web3.providers.rpc import HTTPProvider

from sequence_tx.abi import load_abis
from sequence_tx.assembler import TransactionAssembler
from sequence_tx.config import AppConfig
from sequence_tx.fees import FeeSelector
from sequence_tx.models import FeeOption, FeeToken, FeeTokenType

from tests.fakes import FakeWallet

# Constants for testing
TEST_PRIV_KEY = "0x0123456789abcdef0123456789abcdef0123456789abcdef0123456789abcdef"
TEST_ACCESS_KEY = "AQAAAAAAAAtest"
TEST_TARGET = "0x1234567890123456789012345678901234567890"
TEST_NODE_URL = "https://nodes.example.com/amoy"
TEST_RELAYER_URL = "https://amoy-relayer.example.com"
TEST_EXPLORER_URL = "https://amoy.polygonscan.com/"
TEST_DIRECTORY_URL = "https://keymachine.example.com"
TEST_FEE_RECIPIENT = "0x2222222222222222222222222222222222222222"
TEST_USDC = "0x3333333333333333333333333333333333333333"

TEST_CONFIG = {
    "projectAccessKey": TEST_ACCESS_KEY,
    "privateKey": TEST_PRIV_KEY,
    "chainId": 80002,
    "targetAddress": TEST_TARGET,
    "nodeUrl": TEST_NODE_URL,
    "relayerUrl": TEST_RELAYER_URL,
    "explorerUrl": TEST_EXPLORER_URL,
    "directoryUrl": TEST_DIRECTORY_URL,
}


@pytest.fixture(autouse=True)
def _patch_http_provider(monkeypatch):
    """
    Stub every Web3 HTTP call so no DNS / network traffic is triggered.
    Works for all tests because it is autouse.
    """
    def _dummy(self, method, params=None, _=None):      # signature match
        if method in {"eth_chainId"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0x13882"}     # amoy
        if method in {"eth_gasPrice"}:
            return {"jsonrpc": "2.0", "id": 1, "result": "0x3b9aca00"}  # 1 gwei
        # everything else – return something harmless
        return {"jsonrpc": "2.0", "id": 1, "result": "0x0"}

    monkeypatch.setattr(HTTPProvider, "make_request", _dummy, raising=True)


def native_option(value, gas_limit=None, symbol="POL", contract_address=None):
    return FeeOption(
        token=FeeToken(chain_id=80002, name="Polygon", symbol=symbol, decimals=18,
                       contract_address=contract_address),
        to=TEST_FEE_RECIPIENT,
        value=value,
        gas_limit=gas_limit,
    )


def erc20_option(value, token=TEST_USDC, symbol="USDC", gas_limit=None):
    return FeeOption(
        token=FeeToken(chain_id=80002, name="USD Coin", symbol=symbol, decimals=6,
                       type=FeeTokenType.ERC20_TOKEN, contract_address=token),
        to=TEST_FEE_RECIPIENT,
        value=value,
        gas_limit=gas_limit,
    )


def encoded_uint(value: int) -> bytes:
    return abi_encode(["uint256"], [value])


@pytest.fixture
def abis():
    return load_abis()


@pytest.fixture
def assembler(abis):
    return TransactionAssembler(abis)


@pytest.fixture
def mock_provider():
    """Chain provider with a funded native balance and no ERC-20 balances"""
    provider = MagicMock()
    provider.balance_at = MagicMock(return_value=10**18)
    provider.call_contract = MagicMock(return_value=encoded_uint(0))
    provider.chain_id = MagicMock(return_value=80002)
    return provider


@pytest.fixture
def selector(mock_provider, abis):
    return FeeSelector(mock_provider, abis)


@pytest.fixture
def fake_wallet():
    return FakeWallet()


@pytest.fixture
def mock_account():
    """Create a deterministic test account"""
    return Account.from_key(TEST_PRIV_KEY)


@pytest.fixture
def app_config():
    return AppConfig.model_validate(TEST_CONFIG)


@pytest.fixture
def config_file(tmp_path):
    """Write a config file and return its path; accepts field overrides"""
    def _write(**overrides):
        data = {**TEST_CONFIG, **overrides}
        path = tmp_path / "config.json"
        path.write_text(json.dumps(data))
        return str(path)
    return _write
