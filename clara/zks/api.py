"""Declared API surface of the `zks` namespace.

``ZKS_API`` is the exhaustive, fixed list of exposed methods. Each
``MethodDescriptor`` carries the wire name, the ordered parameters with
their types, the result type and the name of the ``ZksClient`` coroutine
that serves it. Inbound params are decoded against it before any handler
runs, and the upstream client validates results against it.
"""

from dataclasses import dataclass
from functools import cached_property
from types import MappingProxyType
from typing import Any, Mapping, Optional

from pydantic import TypeAdapter, ValidationError

from clara.exceptions import InvalidParamsError

from .types import (
    Address,
    BigDecimal,
    BlockDetails,
    BridgeAddresses,
    Bytes,
    CallRequest,
    FeeParams,
    H256,
    L1BatchDetails,
    L1BatchNumber,
    L2ToL1LogProof,
    MiniblockNumber,
    Proof,
    ProtocolVersion,
    Token,
    Transaction,
    TransactionDetails,
    U256,
    U64,
    Uint8,
    Uint16,
    Uint32,
    Usize,
)


NAMESPACE = "zks"

# Separator used on the upstream wire (jsonrpsee style: zks_getMainContract)
UPSTREAM_SEPARATOR = "_"

# Separators accepted on inbound requests
INBOUND_SEPARATORS = (".", "_")


@dataclass(frozen=True)
class ParamSpec:
    """One declared parameter of a method.

    Attributes:
        name: Name used when params are passed by name.
        type: Type the value is decoded into.
        optional: Whether the param may be omitted or null.
    """

    name: str
    type: Any
    optional: bool = False

    @cached_property
    def adapter(self) -> TypeAdapter:
        return TypeAdapter(Optional[self.type] if self.optional else self.type)


@dataclass(frozen=True)
class MethodDescriptor:
    """Name, parameter and result contract for one exposed operation.

    Attributes:
        name: Bare wire method name, without the namespace prefix.
        client_method: Name of the upstream client coroutine serving it.
        params: Ordered parameter declarations.
        result: Declared result type.
    """

    name: str
    client_method: str
    params: tuple[ParamSpec, ...]
    result: Any

    @property
    def wire_name(self) -> str:
        """Method name as sent to the upstream node."""
        return f"{NAMESPACE}{UPSTREAM_SEPARATOR}{self.name}"

    @cached_property
    def result_adapter(self) -> TypeAdapter:
        return TypeAdapter(self.result)

    def decode_params(self, params: Any) -> list[Any]:
        """Decode inbound JSON-RPC params into positional call arguments.

        Args:
            params: The ``params`` member of the request (list, dict or None).

        Returns:
            One decoded value per declared parameter, in declared order.

        Raises:
            InvalidParamsError: If params don't match the declared shape.
        """
        if params is None:
            params = []

        if isinstance(params, dict):
            unknown = set(params) - {spec.name for spec in self.params}
            if unknown:
                raise InvalidParamsError(
                    self.name, f"unknown params {sorted(unknown)}"
                )
            raw = [params.get(spec.name) for spec in self.params]
            present = [spec.name in params for spec in self.params]
        elif isinstance(params, list):
            if len(params) > len(self.params):
                raise InvalidParamsError(
                    self.name,
                    f"expected at most {len(self.params)} params, got {len(params)}",
                )
            raw = list(params) + [None] * (len(self.params) - len(params))
            present = [i < len(params) for i in range(len(self.params))]
        else:
            raise InvalidParamsError(self.name, "params must be an array or an object")

        decoded = []
        for spec, value, given in zip(self.params, raw, present):
            if not given and not spec.optional:
                raise InvalidParamsError(self.name, f"missing param '{spec.name}'")
            try:
                decoded.append(spec.adapter.validate_python(value))
            except ValidationError as e:
                raise InvalidParamsError(
                    self.name, f"param '{spec.name}': {_first_error(e)}"
                ) from e
        return decoded

    def encode_params(self, args: tuple[Any, ...]) -> list[Any]:
        """Encode call arguments into positional JSON params for upstream."""
        return [
            spec.adapter.dump_python(
                value, mode="json", by_alias=True, exclude_unset=True
            )
            for spec, value in zip(self.params, args)
        ]


def _first_error(exc: ValidationError) -> str:
    error = exc.errors()[0]
    return error["msg"]


def _method(name: str, client_method: str, result: Any, *params: ParamSpec) -> MethodDescriptor:
    return MethodDescriptor(name=name, client_method=client_method, params=params, result=result)


_DESCRIPTORS = (
    _method(
        "estimateGasL1ToL2", "estimate_gas_l1_to_l2", U256,
        ParamSpec("req", CallRequest),
    ),
    _method("getMainContract", "get_main_contract", Address),
    _method("getTestnetPaymaster", "get_testnet_paymaster", Address | None),
    _method("getBridgeContracts", "get_bridge_contracts", BridgeAddresses),
    _method("L1ChainId", "l1_chain_id", U64),
    _method(
        "getConfirmedTokens", "get_confirmed_tokens", list[Token],
        ParamSpec("from", Uint32),
        ParamSpec("limit", Uint8),
    ),
    _method(
        "getTokenPrice", "get_token_price", BigDecimal,
        ParamSpec("token_address", Address),
    ),
    _method(
        "getAllAccountBalances", "get_all_account_balances", dict[Address, U256],
        ParamSpec("address", Address),
    ),
    _method(
        "getL2ToL1MsgProof", "get_l2_to_l1_msg_proof", L2ToL1LogProof | None,
        ParamSpec("block", MiniblockNumber),
        ParamSpec("sender", Address),
        ParamSpec("msg", H256),
        ParamSpec("l2_log_position", Usize, optional=True),
    ),
    _method(
        "getL2ToL1LogProof", "get_l2_to_l1_log_proof", L2ToL1LogProof | None,
        ParamSpec("tx_hash", H256),
        ParamSpec("index", Usize, optional=True),
    ),
    _method("L1BatchNumber", "get_l1_batch_number", U64),
    _method(
        "getL1BatchBlockRange", "get_miniblock_range", tuple[U64, U64] | None,
        ParamSpec("batch", L1BatchNumber),
    ),
    _method(
        "getBlockDetails", "get_block_details", BlockDetails | None,
        ParamSpec("block_number", MiniblockNumber),
    ),
    _method(
        "getTransactionDetails", "get_transaction_details", TransactionDetails | None,
        ParamSpec("hash", H256),
    ),
    _method(
        "getRawBlockTransactions", "get_raw_block_transactions", list[Transaction],
        ParamSpec("block_number", MiniblockNumber),
    ),
    _method(
        "getL1BatchDetails", "get_l1_batch_details", L1BatchDetails | None,
        ParamSpec("batch", L1BatchNumber),
    ),
    _method(
        "getBytecodeByHash", "get_bytecode_by_hash", Bytes | None,
        ParamSpec("hash", H256),
    ),
    _method("getL1GasPrice", "get_l1_gas_price", U64),
    _method("getFeeParams", "get_fee_params", FeeParams),
    _method(
        "getProtocolVersion", "get_protocol_version", ProtocolVersion | None,
        ParamSpec("version_id", Uint16, optional=True),
    ),
    _method(
        "getProof", "get_proof", Proof,
        ParamSpec("address", Address),
        ParamSpec("keys", list[H256]),
        ParamSpec("l1_batch_number", L1BatchNumber),
    ),
)

ZKS_API: Mapping[str, MethodDescriptor] = MappingProxyType(
    {descriptor.name: descriptor for descriptor in _DESCRIPTORS}
)


def lookup_method(method: str) -> MethodDescriptor | None:
    """Resolve an inbound method name such as ``zks.getProof`` or ``zks_getProof``.

    Args:
        method: The ``method`` member of an inbound request.

    Returns:
        The matching descriptor, or None if the method is not declared.
    """
    for separator in INBOUND_SEPARATORS:
        prefix = f"{NAMESPACE}{separator}"
        if method.startswith(prefix):
            return ZKS_API.get(method[len(prefix):])
    return None
