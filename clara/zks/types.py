"""Pydantic types for the zkSync `zks` namespace wire format.

Scalars are ``Annotated`` aliases so they can be used both as model field
types and as standalone ``TypeAdapter`` targets when decoding params.
Records tolerate unknown keys; the gateway returns the upstream JSON
verbatim, so these models only decide whether a payload is well formed.
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, Strict, StringConstraints, model_validator
from pydantic.alias_generators import to_camel


# Hex-encoded values
Address = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-fA-F]{40}$")]
H256 = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-fA-F]{64}$")]
U256 = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-fA-F]{1,64}$")]
U64 = Annotated[str, StringConstraints(pattern=r"^0x[0-9a-fA-F]{1,16}$")]
HexBytes = Annotated[str, StringConstraints(pattern=r"^0x([0-9a-fA-F]{2})*$")]

# Fixed-width unsigned integers, JSON numbers only
Uint8 = Annotated[int, Strict(), Field(ge=0, le=2**8 - 1)]
Uint16 = Annotated[int, Strict(), Field(ge=0, le=2**16 - 1)]
Uint32 = Annotated[int, Strict(), Field(ge=0, le=2**32 - 1)]
Usize = Annotated[int, Strict(), Field(ge=0, le=2**64 - 1)]

MiniblockNumber = Uint32
L1BatchNumber = Uint32

# Arbitrary precision decimal, serialized as a string
BigDecimal = Annotated[str, StringConstraints(pattern=r"^-?\d+(\.\d+)?([eE][-+]?\d+)?$")]

Bytes = list[Uint8]


class ZksModel(BaseModel):
    """Base for camelCase records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )


class SnakeModel(BaseModel):
    """Base for records serialized with their Rust field names."""

    model_config = ConfigDict(extra="allow")


class Eip712Meta(ZksModel):
    """zkSync-specific transaction fields carried in ``eip712Meta``."""

    gas_per_pubdata: U256 | None = None
    factory_deps: list[Bytes | HexBytes] | None = None
    custom_signature: Bytes | HexBytes | None = None
    paymaster_params: dict[str, Any] | None = None


class CallRequest(ZksModel):
    """Call request accepted by ``estimateGasL1ToL2``.

    Unknown keys are dropped so that only declared fields are forwarded.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    from_: Address | None = Field(default=None, alias="from")
    to: Address | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    max_fee_per_gas: U256 | None = None
    max_priority_fee_per_gas: U256 | None = None
    value: U256 | None = None
    data: HexBytes | None = None
    input: HexBytes | None = None
    nonce: U256 | None = None
    transaction_type: U64 | None = Field(default=None, alias="type")
    access_list: list[dict[str, Any]] | None = None
    eip712_meta: Eip712Meta | None = None


class Token(ZksModel):
    """Token descriptor returned by ``getConfirmedTokens``."""

    l1_address: Address
    l2_address: Address
    name: str
    symbol: str
    decimals: Uint8


class BridgeAddresses(ZksModel):
    l1_erc20_default_bridge: Address | None = None
    l2_erc20_default_bridge: Address | None = None
    l1_weth_bridge: Address | None = None
    l2_weth_bridge: Address | None = None
    l1_shared_default_bridge: Address | None = None
    l2_shared_default_bridge: Address | None = None
    l2_legacy_shared_bridge: Address | None = None


class L2ToL1LogProof(ZksModel):
    """Merkle proof of an L2→L1 log inside its batch."""

    proof: list[H256]
    id: Uint32
    root: H256


class _BlockDetailsBase(ZksModel):
    timestamp: int
    l1_tx_count: int
    l2_tx_count: int
    root_hash: H256 | None = None
    status: str
    commit_tx_hash: H256 | None = None
    committed_at: str | None = None
    prove_tx_hash: H256 | None = None
    proven_at: str | None = None
    execute_tx_hash: H256 | None = None
    executed_at: str | None = None
    l1_gas_price: int | None = None
    l2_fair_gas_price: int | None = None
    base_system_contracts_hashes: dict[str, Any] | None = None


class BlockDetails(_BlockDetailsBase):
    number: MiniblockNumber
    l1_batch_number: L1BatchNumber
    operator_address: Address | None = None
    protocol_version: str | None = None


class L1BatchDetails(_BlockDetailsBase):
    number: L1BatchNumber


class TransactionDetails(ZksModel):
    is_l1_originated: bool
    status: str
    fee: U256
    gas_per_pubdata: U256 | None = None
    initiator_address: Address
    received_at: str
    eth_commit_tx_hash: H256 | None = None
    eth_prove_tx_hash: H256 | None = None
    eth_execute_tx_hash: H256 | None = None


class Transaction(SnakeModel):
    """Raw transaction as stored by the node (``getRawBlockTransactions``)."""

    common_data: dict[str, Any]
    execute: dict[str, Any]
    received_timestamp_ms: int
    raw_bytes: HexBytes | None = None


class FeeParamsV1(SnakeModel):
    config: dict[str, Any]
    l1_gas_price: int


class FeeParamsV2(SnakeModel):
    config: dict[str, Any]
    l1_gas_price: int
    l1_pubdata_price: int


class FeeParams(SnakeModel):
    """Versioned fee model parameters, tagged by ``V1`` or ``V2``."""

    V1: FeeParamsV1 | None = None
    V2: FeeParamsV2 | None = None

    @model_validator(mode="after")
    def _exactly_one_version(self) -> "FeeParams":
        if (self.V1 is None) == (self.V2 is None):
            raise ValueError("fee params must carry exactly one of V1 or V2")
        return self


class ProtocolVersion(ZksModel):
    version_id: Uint16 | None = None
    timestamp: int | None = None
    verification_keys_hashes: dict[str, Any] | None = None
    base_system_contracts: dict[str, Any] | None = None
    l2_system_upgrade_tx_hash: H256 | None = None


class StorageProof(ZksModel):
    key: H256
    proof: list[H256]
    value: H256
    index: int


class Proof(ZksModel):
    """Storage proof returned by ``getProof``."""

    address: Address
    storage_proof: list[StorageProof]
