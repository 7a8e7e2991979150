"""
Data models for sequence-tx.
"""
from enum import IntEnum
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field
from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Opaque relayer token correlating a chosen fee option with its accounting
FeeQuote = str


class Transaction(BaseModel):
    """A single call inside a smart-wallet transaction batch"""
    model_config = ConfigDict(populate_by_name=True)

    to: str
    value: int = 0
    gas_limit: Optional[int] = Field(None, alias="gasLimit")
    data: bytes = b""
    delegate_call: bool = Field(False, alias="delegateCall")
    revert_on_error: bool = Field(True, alias="revertOnError")


class FeeTokenType(IntEnum):
    """Token kinds a relayer can ask to be paid in"""
    UNKNOWN = 0
    ERC20_TOKEN = 1
    ERC1155_TOKEN = 2


class FeeToken(BaseModel):
    """Token a fee option is denominated in"""
    model_config = ConfigDict(populate_by_name=True)

    chain_id: int = Field(0, alias="chainId")
    name: str = ""
    symbol: str = ""
    type: FeeTokenType = FeeTokenType.UNKNOWN
    decimals: Optional[int] = None
    logo_url: str = Field("", alias="logoURL")
    contract_address: Optional[str] = Field(None, alias="contractAddress")
    token_id: Optional[int] = Field(None, alias="tokenID")


class FeeOption(BaseModel):
    """A relayer's offer to relay a batch in exchange for a payment"""
    model_config = ConfigDict(populate_by_name=True)

    token: FeeToken
    to: str
    value: Optional[int] = None
    gas_limit: Optional[int] = Field(None, alias="gasLimit")

    @property
    def required_amount(self) -> int:
        """Amount the wallet has to pay, a missing value counts as free."""
        return self.value if self.value is not None else 0

    @property
    def is_native(self) -> bool:
        """True when the fee is paid in the chain's native currency."""
        address = self.token.contract_address
        return address is None or address.lower() == ZERO_ADDRESS


class TxReceipt(BaseModel):
    """Transaction receipt from the blockchain"""
    model_config = ConfigDict(populate_by_name=True)

    tx_hash: str = Field(..., alias="transactionHash")
    status: int
    block_number: Optional[int] = Field(None, alias="blockNumber")
    block_hash: Optional[str] = Field(None, alias="blockHash")
    gas_used: Optional[int] = Field(None, alias="gasUsed")
    from_address: Optional[str] = Field(None, alias="from")
    to_address: Optional[str] = Field(None, alias="to")
    logs: List[Dict[str, Any]] = Field(default_factory=list)

    @classmethod
    def from_web3(cls, web3_receipt: Mapping[str, Any]) -> "TxReceipt":
        """
        Convert a Web3 receipt to our TxReceipt model

        Args:
            web3_receipt: The Web3 transaction receipt

        Returns:
            Our TxReceipt model
        """
        receipt_dict = dict(web3_receipt)

        # Convert bytes to hex strings
        for key, value in list(receipt_dict.items()):
            if isinstance(value, bytes):
                receipt_dict[key] = Web3.to_hex(value)

        receipt_dict["logs"] = [dict(log) for log in receipt_dict.get("logs", [])]
        return cls.model_validate(receipt_dict)
