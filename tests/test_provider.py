"""
Tests for the web3-backed chain provider and EOA deployer.
"""
from unittest.mock import MagicMock

import pytest
from web3 import Web3
from web3.exceptions import TimeExhausted

from sequence_tx.exceptions import ReceiptTimeoutError
from sequence_tx.provider import DEPLOY_GAS_LIMIT, EOADeployer, Web3ChainProvider
from tests.conftest import TEST_USDC
from tests.fakes import TEST_FACTORY, TEST_WALLET


@pytest.fixture
def mock_w3():
    """Create a mock Web3 instance"""
    w3 = MagicMock(spec=Web3)
    w3.eth = MagicMock()
    w3.eth.get_balance = MagicMock(return_value=10)
    w3.eth.call = MagicMock(return_value=b"\x00" * 31 + b"\x2a")
    w3.eth.chain_id = 80002
    w3.eth.gas_price = 30 * 10**9
    w3.eth.get_transaction_count = MagicMock(return_value=7)
    w3.eth.send_raw_transaction = MagicMock(return_value=b"\xaa" * 32)
    return w3


def test_provider_builds_http_provider():
    provider = Web3ChainProvider("https://nodes.example.com/amoy/KEY", timeout=12)
    assert provider.timeout == 12
    assert isinstance(provider.w3, Web3)


def test_provider_timeout_from_env(monkeypatch, mock_w3):
    monkeypatch.setenv("SEQUENCE_RPC_TIMEOUT", "45")
    assert Web3ChainProvider("https://nodes.example.com", w3=mock_w3).timeout == 45


def test_balance_at(mock_w3):
    provider = Web3ChainProvider("https://nodes.example.com", w3=mock_w3)

    assert provider.balance_at(TEST_WALLET.lower()) == 10
    mock_w3.eth.get_balance.assert_called_once_with(TEST_WALLET)


def test_call_contract(mock_w3):
    provider = Web3ChainProvider("https://nodes.example.com", w3=mock_w3)

    assert provider.call_contract(TEST_USDC, b"\x70\xa0\x82\x31") == b"\x00" * 31 + b"\x2a"
    mock_w3.eth.call.assert_called_once_with({
        "to": Web3.to_checksum_address(TEST_USDC),
        "data": "0x70a08231",
    })


def test_chain_id(mock_w3):
    assert Web3ChainProvider("https://nodes.example.com", w3=mock_w3).chain_id() == 80002


def test_provider_errors_propagate(mock_w3):
    mock_w3.eth.get_balance.side_effect = ConnectionError("refused")
    provider = Web3ChainProvider("https://nodes.example.com", w3=mock_w3)

    with pytest.raises(ConnectionError):
        provider.balance_at(TEST_WALLET)


def test_deployer_new_transaction(mock_account, mock_w3):
    deployer = EOADeployer(mock_account, mock_w3)

    tx = deployer.new_transaction(TEST_FACTORY, b"\x01\x02")

    assert tx == {
        "to": Web3.to_checksum_address(TEST_FACTORY),
        "data": "0x0102",
        "value": 0,
        "gas": DEPLOY_GAS_LIMIT,
        "nonce": 7,
        "gasPrice": 30 * 10**9,
    }
    mock_w3.eth.get_transaction_count.assert_called_once_with(mock_account.address, "pending")


def test_deployer_signs_for_chain(mock_account, mock_w3):
    deployer = EOADeployer(mock_account, mock_w3)
    tx = deployer.new_transaction(TEST_FACTORY, b"\x01\x02")

    signed = deployer.sign_tx(tx, 80002)

    assert signed.raw_transaction
    assert "chainId" not in tx


def test_deployer_send_and_wait(mock_account, mock_w3):
    mock_w3.eth.wait_for_transaction_receipt = MagicMock(return_value={
        "transactionHash": b"\xaa" * 32,
        "blockNumber": 100,
        "status": 1,
        "logs": [],
    })
    deployer = EOADeployer(mock_account, mock_w3, poll_interval=0.1)
    signed = MagicMock(raw_transaction=b"\xf8\x6b")

    tx_hash, wait = deployer.send_transaction(signed)
    receipt = wait(30)

    assert tx_hash == "0x" + "aa" * 32
    mock_w3.eth.send_raw_transaction.assert_called_once_with(b"\xf8\x6b")
    mock_w3.eth.wait_for_transaction_receipt.assert_called_once_with(
        b"\xaa" * 32, timeout=30, poll_latency=0.1
    )
    assert receipt.tx_hash == tx_hash
    assert receipt.status == 1


def test_deployer_wait_timeout(mock_account, mock_w3):
    mock_w3.eth.wait_for_transaction_receipt = MagicMock(side_effect=TimeExhausted("gone"))
    deployer = EOADeployer(mock_account, mock_w3)

    _, wait = deployer.send_transaction(MagicMock(raw_transaction=b"\x01"))
    with pytest.raises(ReceiptTimeoutError, match="not found after 5s"):
        wait(5)
