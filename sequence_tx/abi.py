"""
Immutable ABI descriptors for the contracts this package talks to.

The descriptors are parsed once (``load_abis``) and passed by reference to the
components that encode calls or decode results.
"""
import json
import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Sequence, Tuple

from eth_abi import decode as abi_decode
from eth_abi import encode as abi_encode
from eth_abi.exceptions import DecodingError, EncodingError as AbiEncodingError
from eth_utils import function_signature_to_4byte_selector
from eth_utils.abi import get_abi_input_types, get_abi_output_types

from .exceptions import EncodingError

logger = logging.getLogger(__name__)

ERC20_TOKEN_ABI_JSON = """[
  {"inputs": [{"internalType": "address", "name": "account", "type": "address"}],
   "name": "balanceOf",
   "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
   "stateMutability": "view", "type": "function"},
  {"inputs": [{"internalType": "address", "name": "to", "type": "address"},
              {"internalType": "uint256", "name": "value", "type": "uint256"}],
   "name": "transfer",
   "outputs": [{"internalType": "bool", "name": "", "type": "bool"}],
   "stateMutability": "nonpayable", "type": "function"}
]"""

MINT_FUNCTION_ABI_JSON = """[
  {"type": "function", "name": "mint",
   "inputs": [{"name": "to", "type": "address"},
              {"name": "tokenId", "type": "uint256"},
              {"name": "amount", "type": "uint256"},
              {"name": "data", "type": "bytes"}],
   "outputs": [], "stateMutability": "nonpayable"}
]"""


@dataclass(frozen=True)
class AbiFunction:
    """A single contract function: its name, argument types and selector"""
    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def encode_call(self, *args: Any) -> bytes:
        """
        Pack a call to this function.

        Raises:
            EncodingError: If the arguments don't match the input types
        """
        if len(args) != len(self.inputs):
            raise EncodingError(
                f"{self.name}: expected {len(self.inputs)} arguments, got {len(args)}"
            )
        try:
            return self.selector + abi_encode(list(self.inputs), list(args))
        except (AbiEncodingError, TypeError, ValueError) as e:
            raise EncodingError(f"encode {self.name}: {e}", cause=e) from e

    def decode_output(self, data: bytes) -> Tuple[Any, ...]:
        """
        Unpack the return data of a call to this function.

        Raises:
            EncodingError: If the data doesn't decode as the output types
        """
        try:
            return tuple(abi_decode(list(self.outputs), bytes(data)))
        except (DecodingError, TypeError, ValueError) as e:
            raise EncodingError(f"decode {self.name}: {e}", cause=e) from e


class ContractAbi:
    """Read-only collection of the functions declared by an ABI document"""

    def __init__(self, functions: Mapping[str, AbiFunction]):
        self._functions = MappingProxyType(dict(functions))

    def __getitem__(self, name: str) -> AbiFunction:
        try:
            return self._functions[name]
        except KeyError:
            raise EncodingError(f"method '{name}' not found in ABI") from None

    def __contains__(self, name: str) -> bool:
        return name in self._functions

    @property
    def names(self) -> Sequence[str]:
        return tuple(self._functions)

    @classmethod
    def from_json(cls, definition: str) -> "ContractAbi":
        """
        Parse a JSON ABI document, keeping only function entries.

        Tuple arguments are collapsed to their canonical ``(type,...)`` form.

        Raises:
            EncodingError: If the document is not a valid ABI
        """
        try:
            entries = json.loads(definition)
        except ValueError as e:
            raise EncodingError(f"parse ABI: {e}", cause=e) from e
        if not isinstance(entries, list):
            raise EncodingError(f"parse ABI: expected a list, got {type(entries).__name__}")

        functions = {}
        try:
            for entry in entries:
                if entry.get("type", "function") != "function":
                    continue
                function = {"inputs": [], "outputs": [], **entry, "type": "function"}
                functions[entry["name"]] = AbiFunction(
                    name=entry["name"],
                    inputs=tuple(get_abi_input_types(function)),
                    outputs=tuple(get_abi_output_types(function)),
                )
        except (AttributeError, KeyError, TypeError) as e:
            raise EncodingError(f"parse ABI: malformed entry: {e}", cause=e) from e
        return cls(functions)


@dataclass(frozen=True)
class ContractAbis:
    """The ABIs needed to mint and pay relayer fees"""
    erc20: ContractAbi
    mint: ContractAbi


def load_abis(
    erc20_json: str = ERC20_TOKEN_ABI_JSON,
    mint_json: str = MINT_FUNCTION_ABI_JSON,
) -> ContractAbis:
    """
    Build the ABI descriptors once at startup.

    Raises:
        EncodingError: If either definition is malformed or lacks a needed method
    """
    abis = ContractAbis(
        erc20=ContractAbi.from_json(erc20_json),
        mint=ContractAbi.from_json(mint_json),
    )
    for contract, method in ((abis.erc20, "balanceOf"), (abis.erc20, "transfer"), (abis.mint, "mint")):
        if method not in contract:
            raise EncodingError(f"ABI is missing required method '{method}'")
    logger.debug("Loaded ERC-20 and mint ABI descriptors")
    return abis
