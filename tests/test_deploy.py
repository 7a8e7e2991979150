"""
Tests for the wallet deployment step.
"""
from unittest.mock import MagicMock

import pytest

from sequence_tx.deploy import ensure_wallet_deployed
from sequence_tx.exceptions import (
    DeploymentError,
    EncodingError,
    NetworkError,
    ReceiptTimeoutError,
)
from sequence_tx.provider import DEPLOY_GAS_LIMIT
from sequence_tx.receipts import wait_for_receipt
from tests.fakes import TEST_FACTORY, FakeDeployer, FakeWallet


def test_already_deployed_is_noop(mock_provider, capsys):
    wallet = FakeWallet(deployed=True)
    deployer = FakeDeployer(wallet)

    assert ensure_wallet_deployed(wallet, mock_provider, deployer) is False

    assert deployer.requests == []
    assert wallet.is_deployed_calls == 1
    mock_provider.chain_id.assert_not_called()
    assert "Wallet already deployed on-chain." in capsys.readouterr().out


def test_deploys_from_eoa(mock_provider, capsys):
    wallet = FakeWallet(deployed=False)
    deployer = FakeDeployer(wallet)

    assert ensure_wallet_deployed(wallet, mock_provider, deployer) is True

    assert deployer.requests[0]["to"] == TEST_FACTORY
    assert deployer.requests[0]["gas"] == DEPLOY_GAS_LIMIT == 3_000_000
    assert wallet.is_deployed_calls == 2
    out = capsys.readouterr().out
    assert "Wallet is not deployed. Deploying from signer EOA..." in out
    assert f"Wallet deployed at {wallet.address}" in out


def test_failed_status(mock_provider):
    wallet = FakeWallet(deployed=False)

    with pytest.raises(DeploymentError, match="deployment tx failed with status 0"):
        ensure_wallet_deployed(wallet, mock_provider, FakeDeployer(wallet, status=0))


def test_still_not_deployed(mock_provider):
    wallet = FakeWallet(deployed=False, deploy_on_send=False)

    with pytest.raises(DeploymentError, match="still not deployed after deployment tx"):
        ensure_wallet_deployed(wallet, mock_provider, FakeDeployer(wallet))


def test_confirmation_timeout(mock_provider):
    wallet = FakeWallet(deployed=False)

    def never(timeout):
        raise ReceiptTimeoutError("receipt not found")

    deployer = FakeDeployer(wallet, wait=never)
    with pytest.raises(ReceiptTimeoutError, match="deployment confirmation: receipt not found"):
        ensure_wallet_deployed(wallet, mock_provider, deployer, wait=wait_for_receipt)


def test_status_check_failure(mock_provider):
    wallet = FakeWallet()
    wallet.is_deployed = MagicMock(side_effect=ConnectionError("rpc down"))

    with pytest.raises(NetworkError, match="check deployment: rpc down"):
        ensure_wallet_deployed(wallet, mock_provider, FakeDeployer(wallet))


def test_encode_failure(mock_provider):
    wallet = FakeWallet(deployed=False)
    wallet.encode_deployment = MagicMock(side_effect=ValueError("bad context"))

    with pytest.raises(EncodingError, match="encode deployment: bad context"):
        ensure_wallet_deployed(wallet, mock_provider, FakeDeployer(wallet))


def test_chain_id_failure(mock_provider):
    wallet = FakeWallet(deployed=False)
    mock_provider.chain_id.side_effect = TimeoutError("slow node")

    with pytest.raises(NetworkError, match="fetch chain id: slow node"):
        ensure_wallet_deployed(wallet, mock_provider, FakeDeployer(wallet))


@pytest.mark.parametrize("method, step", [
    ("new_transaction", "prepare deployment tx"),
    ("sign_tx", "sign deployment tx"),
    ("send_transaction", "send deployment tx"),
])
def test_deployer_failures(mock_provider, method, step):
    wallet = FakeWallet(deployed=False)
    deployer = FakeDeployer(wallet)
    setattr(deployer, method, MagicMock(side_effect=RuntimeError("boom")))

    with pytest.raises(NetworkError, match=f"{step}: boom"):
        ensure_wallet_deployed(wallet, mock_provider, deployer)
    assert wallet.deployed is False
