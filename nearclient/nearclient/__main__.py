"""Command-line entrypoint.

    python -m nearclient status
    python -m nearclient call block '{"finality": "final"}'
    python -m nearclient --url http://127.0.0.1:3030 fast-forward 10
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from typing import Any

import anyio

from nearclient.client import Client
from nearclient.config import ClientSettings
from nearclient.errors import CallError, InvalidEndpoint
from nearclient.methods.any import any_request
from nearclient.methods.catalog import RpcStatusRequest
from nearclient.sandbox import fast_forward

log = logging.getLogger("nearclient")


def build_parser(settings: ClientSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="nearclient", description="NEAR JSON-RPC client")
    parser.add_argument("--url", default=settings.url, help="RPC endpoint")
    auth = parser.add_mutually_exclusive_group()
    auth.add_argument("--api-key", default=None, help="Send an x-api-key header")
    auth.add_argument("--bearer", default=None, help="Send an Authorization: Bearer header")
    parser.add_argument("--log-level", default=settings.log_level, help="Logging level")

    sub = parser.add_subparsers(dest="command", required=True)

    call = sub.add_parser("call", help="Call any method with raw JSON params")
    call.add_argument("method")
    call.add_argument("params", nargs="?", default="null", help="JSON params (default: null)")

    sub.add_parser("status", help="Print node status")

    ff = sub.add_parser("fast-forward", help="[Sandbox] Advance the node by N blocks")
    ff.add_argument("delta_height", type=int)
    ff.add_argument("--attempts", type=int, default=settings.poll_attempts)
    ff.add_argument("--interval", type=float, default=settings.poll_interval)
    return parser


def effective_settings(args: argparse.Namespace, settings: ClientSettings) -> ClientSettings:
    """Command-line options override the environment."""
    if args.api_key or args.bearer:
        settings = dataclasses.replace(settings, api_key=args.api_key, bearer_token=args.bearer)
    return dataclasses.replace(settings, url=args.url)


async def run(args: argparse.Namespace, settings: ClientSettings) -> Any:
    async with Client.from_settings(settings) as client:
        if args.command == "call":
            return await client.call(any_request(args.method, json.loads(args.params)))
        if args.command == "status":
            return await client.call(RpcStatusRequest())
        height = await fast_forward(
            client, args.delta_height, attempts=args.attempts, interval=args.interval
        )
        return {"latest_block_height": height}


def _to_json(value: Any) -> Any:
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def main(argv: list[str] | None = None) -> int:
    try:
        settings = ClientSettings.from_env()
    except ValueError as exc:
        print(f"nearclient: {exc}", file=sys.stderr)
        return 2
    args = build_parser(settings).parse_args(argv)
    try:
        settings = effective_settings(args, settings)
    except ValueError as exc:
        print(f"nearclient: {exc}", file=sys.stderr)
        return 2

    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        result = anyio.run(run, args, settings)
    except json.JSONDecodeError as exc:
        log.error("params are not valid JSON: %s", exc)
        return 2
    except InvalidEndpoint as exc:
        log.error("%s", exc)
        return 2
    except CallError as exc:
        log.error("%s", exc)
        return 1
    print(json.dumps(_to_json(result), indent=2))
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        pass
