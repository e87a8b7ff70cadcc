"""JSON-RPC client for the upstream zkSync node.

``ZksClient`` exposes one coroutine per ``zks`` method. Every coroutine
takes the same parameters, in the same order, as the method declared in
``ZKS_API`` and returns the upstream result exactly as decoded from JSON.
"""

import itertools
from typing import Any

import httpx
from pydantic import ValidationError

from clara.zks.api import ZKS_API, MethodDescriptor
from clara.zks.types import CallRequest

from .exceptions import UpstreamDecodeError, UpstreamRpcError, UpstreamTransportError


class ZksClient:
    """Typed client bound to a single upstream JSON-RPC endpoint.

    The wrapped ``httpx.AsyncClient`` is safe to share between concurrent
    calls; the client itself holds no per-call state besides the request
    id counter.

    Attributes:
        url: URL of the upstream node.
        http: Shared HTTP client used for every request.
        timeout: Per-request timeout in seconds, or None for no timeout.
    """

    def __init__(
        self,
        url: str,
        http: httpx.AsyncClient,
        timeout: float | None = None,
    ) -> None:
        self.url = url
        self.http = http
        self.timeout = timeout
        self._ids = itertools.count(1)

    async def call(self, descriptor: MethodDescriptor, *args: Any) -> Any:
        """Invoke one upstream method and validate its result.

        Args:
            descriptor: Declared contract of the method.
            *args: Positional arguments in declared order.

        Returns:
            The ``result`` member of the upstream response, unchanged.

        Raises:
            UpstreamRpcError: If upstream returns a JSON-RPC error object.
            UpstreamTransportError: If the HTTP exchange fails.
            UpstreamDecodeError: If the response is not a valid JSON-RPC
                response or the result doesn't match the declared type.
        """
        payload = {
            "jsonrpc": "2.0",
            "id": next(self._ids),
            "method": descriptor.wire_name,
            "params": descriptor.encode_params(args),
        }

        try:
            response = await self.http.post(
                self.url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except httpx.TimeoutException:
            raise UpstreamTransportError(self.url, "request timed out")
        except httpx.RequestError as e:
            raise UpstreamTransportError(self.url, str(e) or e.__class__.__name__)

        if response.status_code >= 400:
            raise UpstreamTransportError(
                self.url,
                f"HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            data = response.json()
        except ValueError:
            raise UpstreamDecodeError(descriptor.wire_name, "response body is not JSON")

        if not isinstance(data, dict):
            raise UpstreamDecodeError(descriptor.wire_name, "response is not a JSON-RPC object")

        error = data.get("error")
        if error is not None:
            if not isinstance(error, dict) or not isinstance(error.get("message"), str):
                raise UpstreamDecodeError(descriptor.wire_name, "malformed error object")
            raise UpstreamRpcError(
                rpc_code=error.get("code", 0),
                message=error["message"],
                data=error.get("data"),
            )

        if "result" not in data:
            raise UpstreamDecodeError(descriptor.wire_name, "response has neither result nor error")

        result = data["result"]
        try:
            descriptor.result_adapter.validate_python(result)
        except ValidationError as e:
            raise UpstreamDecodeError(descriptor.wire_name, e.errors()[0]["msg"])
        return result

    async def estimate_gas_l1_to_l2(self, req: CallRequest) -> str:
        return await self.call(ZKS_API["estimateGasL1ToL2"], req)

    async def get_main_contract(self) -> str:
        return await self.call(ZKS_API["getMainContract"])

    async def get_testnet_paymaster(self) -> str | None:
        return await self.call(ZKS_API["getTestnetPaymaster"])

    async def get_bridge_contracts(self) -> dict[str, Any]:
        return await self.call(ZKS_API["getBridgeContracts"])

    async def l1_chain_id(self) -> str:
        return await self.call(ZKS_API["L1ChainId"])

    async def get_confirmed_tokens(self, from_: int, limit: int) -> list[dict[str, Any]]:
        return await self.call(ZKS_API["getConfirmedTokens"], from_, limit)

    async def get_token_price(self, token_address: str) -> str:
        return await self.call(ZKS_API["getTokenPrice"], token_address)

    async def get_all_account_balances(self, address: str) -> dict[str, str]:
        return await self.call(ZKS_API["getAllAccountBalances"], address)

    async def get_l2_to_l1_msg_proof(
        self,
        block: int,
        sender: str,
        msg: str,
        l2_log_position: int | None = None,
    ) -> dict[str, Any] | None:
        return await self.call(
            ZKS_API["getL2ToL1MsgProof"], block, sender, msg, l2_log_position
        )

    async def get_l2_to_l1_log_proof(
        self,
        tx_hash: str,
        index: int | None = None,
    ) -> dict[str, Any] | None:
        return await self.call(ZKS_API["getL2ToL1LogProof"], tx_hash, index)

    async def get_l1_batch_number(self) -> str:
        return await self.call(ZKS_API["L1BatchNumber"])

    async def get_miniblock_range(self, batch: int) -> list[str] | None:
        return await self.call(ZKS_API["getL1BatchBlockRange"], batch)

    async def get_block_details(self, block_number: int) -> dict[str, Any] | None:
        return await self.call(ZKS_API["getBlockDetails"], block_number)

    async def get_transaction_details(self, hash: str) -> dict[str, Any] | None:
        return await self.call(ZKS_API["getTransactionDetails"], hash)

    async def get_raw_block_transactions(self, block_number: int) -> list[dict[str, Any]]:
        return await self.call(ZKS_API["getRawBlockTransactions"], block_number)

    async def get_l1_batch_details(self, batch: int) -> dict[str, Any] | None:
        return await self.call(ZKS_API["getL1BatchDetails"], batch)

    async def get_bytecode_by_hash(self, hash: str) -> list[int] | None:
        return await self.call(ZKS_API["getBytecodeByHash"], hash)

    async def get_l1_gas_price(self) -> str:
        return await self.call(ZKS_API["getL1GasPrice"])

    async def get_fee_params(self) -> dict[str, Any]:
        return await self.call(ZKS_API["getFeeParams"])

    async def get_protocol_version(self, version_id: int | None = None) -> dict[str, Any] | None:
        return await self.call(ZKS_API["getProtocolVersion"], version_id)

    async def get_proof(
        self,
        address: str,
        keys: list[str],
        l1_batch_number: int,
    ) -> dict[str, Any]:
        return await self.call(ZKS_API["getProof"], address, keys, l1_batch_number)
