"""Sandbox helpers.

``fast_forward`` asks a sandbox node to skip ahead by some number of
blocks, then polls ``status`` until the node reports the target height.
This is the only place the client retries anything: fixed interval,
bounded attempts.
"""

from __future__ import annotations

import logging

import anyio
from tenacity import (
    AsyncRetrying,
    RetryError,
    retry_if_exception_type,
    retry_if_result,
    stop_after_attempt,
    wait_fixed,
)

from nearclient.client import Client
from nearclient.errors import PollTimeout, TransportError
from nearclient.methods.catalog import RpcSandboxFastForwardRequest, RpcStatusRequest

log = logging.getLogger(__name__)

DEFAULT_POLL_ATTEMPTS = 20
DEFAULT_POLL_INTERVAL = 0.5  # seconds


async def current_height(client: Client) -> int:
    status = await client.call(RpcStatusRequest())
    return status.sync_info.latest_block_height


async def wait_for_height(
    client: Client,
    target_height: int,
    *,
    attempts: int = DEFAULT_POLL_ATTEMPTS,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> int:
    """Poll ``status`` until the node reaches *target_height*.

    Transport failures count as a failed attempt.  Returns the height
    reached; raises ``PollTimeout`` once *attempts* are used up.
    """
    last_height: int | None = None

    def _below_target(height: int) -> bool:
        return height < target_height

    retrier = AsyncRetrying(
        stop=stop_after_attempt(attempts),
        wait=wait_fixed(interval),
        retry=retry_if_result(_below_target) | retry_if_exception_type(TransportError),
        sleep=anyio.sleep,
    )
    try:
        async for attempt in retrier:
            with attempt:
                last_height = await current_height(client)
                log.debug(
                    "poll %d: height %d / %d",
                    attempt.retry_state.attempt_number,
                    last_height,
                    target_height,
                )
            if not attempt.retry_state.outcome.failed:
                attempt.retry_state.set_result(last_height)
    except RetryError as exc:
        raise PollTimeout(target_height, last_height, attempts) from exc
    return last_height


async def fast_forward(
    client: Client,
    delta_height: int,
    *,
    attempts: int = DEFAULT_POLL_ATTEMPTS,
    interval: float = DEFAULT_POLL_INTERVAL,
) -> int:
    """Advance a sandbox node by *delta_height* blocks and wait for it.

    Returns the height reached.  Raises ``PollTimeout`` if the node does
    not get there within *attempts* polls.
    """
    if delta_height <= 0:
        raise ValueError("delta_height must be positive")

    start = await current_height(client)
    target = start + delta_height
    log.info("fast-forwarding sandbox from %d to %d", start, target)

    await client.call(RpcSandboxFastForwardRequest(delta_height=delta_height))
    return await wait_for_height(client, target, attempts=attempts, interval=interval)
