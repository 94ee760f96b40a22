from typing import Any, Dict, List, Optional, Tuple

from hexbytes import HexBytes
from pydantic import BaseModel
from pydantic import Field
from pydantic import field_validator
from web3 import Web3

from multicall_helper.utils.abi import get_contract_abi_dict
from multicall_helper.utils.abi import get_encoded_function_signature
from multicall_helper.utils.exceptions import InvalidCallError


class Call(BaseModel):
    """A contract call to be batched through the aggregator.

    Either ``function_name`` (with ``abi`` and ``args``) or pre-encoded
    ``call_data`` must be set. Results are only decoded when the function
    name is known.
    """

    target: str
    abi: List[Dict[str, Any]] = []
    function_name: Optional[str] = None
    args: List[Any] = []
    call_data: Optional[Any] = None

    @field_validator('target')
    @classmethod
    def checksum_target(cls, v):
        return Web3.to_checksum_address(v)

    @field_validator('call_data')
    @classmethod
    def to_hexbytes(cls, v):
        if v is None:
            return v
        return HexBytes(v)

    @classmethod
    def from_contract(cls, contract, function_name: str, args: Optional[List[Any]] = None, **kwargs):
        """Builds a call from any contract object exposing ``address`` and ``abi``."""
        return cls(
            target=contract.address,
            abi=list(contract.abi),
            function_name=function_name,
            args=list(args or []),
            **kwargs,
        )

    def encode(self) -> HexBytes:
        """
        Returns the call data sent to ``target``.

        Raises:
            InvalidCallError: If the call cannot be encoded against its ABI.
        """
        if self.call_data is not None:
            return self.call_data
        if not self.function_name:
            raise InvalidCallError(
                request={'target': self.target},
                extra_info='Call needs either function_name or call_data',
            )
        try:
            return get_encoded_function_signature(
                get_contract_abi_dict(self.abi), self.function_name, self.args,
            )
        except Exception as e:
            raise InvalidCallError(
                request={'target': self.target, 'function_name': self.function_name, 'args': self.args},
                underlying_exception=e,
                extra_info=f'Could not encode call to {self.function_name}: {str(e)}',
            ) from e


class Call3(Call):
    """Call with a per-call failure tolerance flag."""

    allow_failure: bool = False


class Call3Value(Call3):
    """Call3 that also forwards native currency (in wei) to its target."""

    value: int = Field(default=0, ge=0)


class AggregateResult(BaseModel):
    """Output of ``aggregate``: raw return data, undecoded."""

    block_number: int
    return_data: List[Any]


class BlockAggregateResult(BaseModel):
    """Output of ``try_block_and_aggregate`` and ``block_and_aggregate``."""

    block_number: int
    block_hash: str
    return_data: List[Tuple[bool, Any]]
