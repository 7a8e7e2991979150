"""
Transaction batch assembly: the mint call and the relayer fee payment.
"""
import logging
from typing import List, Optional, Sequence

from web3 import Web3

from .abi import ContractAbis
from .exceptions import EncodingError
from .models import FeeOption, FeeTokenType, Transaction

logger = logging.getLogger(__name__)

MINT_TOKEN_ID = 1
MINT_AMOUNT = 1


class TransactionAssembler:
    """
    Builds the ordered batch submitted through the smart wallet.

    Every transaction produced here reverts the whole batch on error and is
    executed as an ordinary call, never a delegate call.
    """

    def __init__(self, abis: ContractAbis):
        self.abis = abis

    def encode_mint(
        self,
        to: str,
        token_id: Optional[int],
        amount: Optional[int],
        data: Optional[bytes] = None,
    ) -> bytes:
        """
        Encode ``mint(to, tokenId, amount, data)``.

        Raises:
            EncodingError: If token_id or amount is None, or packing fails
        """
        if token_id is None or amount is None:
            raise EncodingError("tokenID and amount cannot be None")
        if data is None:
            data = b""
        return self.abis.mint["mint"].encode_call(
            Web3.to_checksum_address(to), token_id, amount, data
        )

    def mint_transaction(self, target: str, recipient: str) -> Transaction:
        """
        Mint one unit of token id 1 on ``target`` to ``recipient``.
        """
        calldata = self.encode_mint(recipient, MINT_TOKEN_ID, MINT_AMOUNT)
        return Transaction(
            to=Web3.to_checksum_address(target),
            value=0,
            gas_limit=0,
            data=calldata,
            delegate_call=False,
            revert_on_error=True,
        )

    def build_fee_payment(self, option: FeeOption) -> Transaction:
        """
        Build the transaction paying the relayer for ``option``.

        Native fees are a plain value transfer to the fee recipient. ERC-20
        fees call ``transfer`` on the token contract.

        Raises:
            EncodingError: If the option's token kind is unsupported
        """
        if option.is_native:
            return Transaction(
                to=option.to,
                value=option.required_amount,
                gas_limit=option.gas_limit,
                delegate_call=False,
                revert_on_error=True,
            )

        if option.token.type != FeeTokenType.ERC20_TOKEN or not option.token.contract_address:
            raise EncodingError("unsupported fee token option")

        calldata = self.abis.erc20["transfer"].encode_call(
            Web3.to_checksum_address(option.to), option.required_amount
        )
        return Transaction(
            to=option.token.contract_address,
            value=0,
            gas_limit=option.gas_limit,
            data=calldata,
            delegate_call=False,
            revert_on_error=True,
        )

    def attach_fee(self, option: FeeOption, txs: Sequence[Transaction]) -> List[Transaction]:
        """Prepend the fee payment so the relayer is paid first within the batch."""
        fee_txn = self.build_fee_payment(option)
        logger.debug(f"Prepending fee payment to {fee_txn.to}")
        return [fee_txn, *txs]
