"""Structured log record for every dispatched call."""

import time
from contextlib import asynccontextmanager
from enum import Enum
from typing import AsyncGenerator

import structlog

logger = structlog.get_logger("clara.calls")


class CallStatus(str, Enum):
    """Outcome of one dispatched call."""

    success = "success"
    error = "error"
    invalid_params = "invalid_params"


class CallLog:
    """Tracks timing and outcome of one call.

    Attributes:
        method: Inbound method name.
        request_id: JSON-RPC id of the request, if any.
        start_time: When the call started.
        status: Final status of the call.
        message: Error description if the call failed.
    """

    def __init__(self, method: str, request_id: str | int | None = None) -> None:
        self.method = method
        self.request_id = request_id
        self.start_time = time.perf_counter()
        self.status = CallStatus.success
        self.message: str | None = None

    def mark_error(self, message: str) -> None:
        self.status = CallStatus.error
        self.message = message

    def mark_invalid_params(self, message: str) -> None:
        self.status = CallStatus.invalid_params
        self.message = message

    @property
    def duration_ms(self) -> int:
        """Calculate duration in milliseconds."""
        elapsed = time.perf_counter() - self.start_time
        return int(elapsed * 1000)


@asynccontextmanager
async def rpc_call_log(
    method: str,
    request_id: str | int | None = None,
) -> AsyncGenerator[CallLog, None]:
    """Log one ``rpc_call`` record when the wrapped call finishes.

    Example:
        async with rpc_call_log("zks.getProof", 1) as call:
            try:
                result = await do_call()
            except Exception as e:
                call.mark_error(str(e))
    """
    call = CallLog(method, request_id)
    try:
        yield call
    finally:
        log = logger.info if call.status is CallStatus.success else logger.warning
        log(
            "rpc_call",
            method=call.method,
            request_id=call.request_id,
            status=call.status.value,
            duration_ms=call.duration_ms,
            error=call.message,
        )
