"""
Relayer fee selection.

Picks the cheapest fee option the wallet can currently pay for.
"""
import logging
from typing import Optional, Sequence

from web3 import Web3

from .abi import ContractAbis
from .exceptions import AffordabilityError, EncodingError, NetworkError
from .models import FeeOption, FeeTokenType
from .sdk import ChainProvider

logger = logging.getLogger(__name__)


class FeeSelector:
    """Checks fee options against wallet balances and picks one"""

    def __init__(self, provider: ChainProvider, abis: ContractAbis):
        self.provider = provider
        self.abis = abis

    def select(self, wallet_address: str, options: Sequence[FeeOption]) -> FeeOption:
        """
        Return the cheapest affordable option.

        Equal amounts keep the option seen first.

        Args:
            wallet_address: Smart wallet paying the fee
            options: Options offered by the relayer, in relayer order

        Returns:
            The selected fee option

        Raises:
            AffordabilityError: If no option is affordable
            NetworkError: If a balance read fails
            EncodingError: If a balanceOf result can't be decoded
        """
        selected: Optional[FeeOption] = None

        for option in options:
            if not self.has_sufficient_balance(wallet_address, option):
                continue

            if selected is None or option.required_amount < selected.required_amount:
                selected = option

        if selected is None:
            raise AffordabilityError(f"no affordable fee options for wallet {wallet_address}")

        logger.debug(f"Selected fee option {selected.required_amount} {selected.token.symbol}")
        return selected

    def has_sufficient_balance(self, wallet_address: str, option: FeeOption) -> bool:
        required = option.required_amount
        if required == 0:
            return True

        if option.is_native:
            try:
                balance = self.provider.balance_at(wallet_address)
            except Exception as e:
                raise NetworkError(f"native balance: {e}", cause=e) from e
            logger.debug(f"Native balance {balance}, required {required}")
            return balance >= required

        if option.token.type == FeeTokenType.ERC20_TOKEN and option.token.contract_address:
            balance = self.erc20_balance_of(option.token.contract_address, wallet_address)
            logger.debug(f"{option.token.symbol} balance {balance}, required {required}")
            return balance >= required

        logger.warning(
            f"Skipping unsupported fee token type {option.token.type.value} for {option.token.symbol}"
        )
        return False

    def erc20_balance_of(self, token: str, owner: str) -> int:
        """
        Read an ERC-20 balance through a ``balanceOf`` call.

        Raises:
            NetworkError: If the call fails
            EncodingError: If the result can't be decoded
        """
        balance_of = self.abis.erc20["balanceOf"]
        calldata = balance_of.encode_call(Web3.to_checksum_address(owner))

        try:
            output = self.provider.call_contract(token, calldata)
        except Exception as e:
            raise NetworkError(f"erc20 balanceOf call: {e}", cause=e) from e

        results = balance_of.decode_output(output)
        if not results:
            raise EncodingError("erc20 balanceOf returned no results")

        balance = results[0]
        if not isinstance(balance, int):
            raise EncodingError(f"unexpected erc20 balance type {type(balance).__name__}")
        return balance
