"""Admin CLI for the R/R alert service.

Usage:
  rr-alerts-admin health
  rr-alerts-admin check --all
  rr-alerts-admin tickers
  rr-alerts-admin price AAPL
  rr-alerts-admin run-batch            (in-process, no server required)
  rr-alerts-admin subscribers add someone@example.com
  rr-alerts-admin unsub-link someone@example.com
"""
import argparse
import asyncio
import json
import logging
import sys

import httpx

from rr_alerts.container import Container
from rr_alerts.providers.core import StateStoreError


def print_json(data: object) -> None:
    print(json.dumps(data, indent=2, default=str))


# ---- Server commands ----
def cmd_health(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/")
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_check(client: httpx.Client, args: argparse.Namespace) -> int:
    params = {"all": "1"} if args.all else {}
    r = client.post("/cron/check-crossings", params=params)
    r.raise_for_status()
    print_json(r.json())
    return 0


def cmd_tickers(client: httpx.Client, _: argparse.Namespace) -> int:
    r = client.get("/tickers")
    r.raise_for_status()
    data = r.json()
    print(f"Found {len(data)} tickers")
    print_json(data)
    return 0


def cmd_price(client: httpx.Client, args: argparse.Namespace) -> int:
    r = client.get(f"/tickers/{args.symbol}/price")
    r.raise_for_status()
    print_json(r.json())
    return 0


# ---- Local commands (use the configured store directly) ----
async def _run_batch(container: Container, force_all: bool) -> int:
    summary = await container.batch_runner().run(force_all=force_all)
    print_json(summary.model_dump(by_alias=True))
    return 0


async def _subscribers(container: Container, args: argparse.Namespace) -> int:
    directory = container.subscribers()
    if args.subscribers_cmd == "list":
        for email in await directory.list_active():
            print(email)
        return 0
    action = {
        "add": directory.add,
        "remove": directory.remove,
        "unsubscribe": directory.unsubscribe,
        "resubscribe": directory.resubscribe,
    }[args.subscribers_cmd]
    print(f"{args.subscribers_cmd}: {await action(args.email)}")
    return 0


def run_local(args: argparse.Namespace) -> int:
    container = Container()
    if args.command == "unsub-link":
        print(container.unsubscribe_signer().link(args.email))
        return 0
    if args.command == "run-batch":
        missing = container.settings().missing_batch_settings()
        if missing:
            print(f"Missing configuration: {', '.join(missing)}", file=sys.stderr)
            return 2
        coro = _run_batch(container, args.all)
    else:
        coro = _subscribers(container, args)
    try:
        return asyncio.run(coro)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except StateStoreError as e:
        print(f"State store error: {e}", file=sys.stderr)
        return 1


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Operate the R/R alert service.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--base-url",
        default="http://localhost:8000",
        help="API base URL (default: http://localhost:8000)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=120.0,
        help="Request timeout in seconds (default: 120)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")

    subparsers.add_parser("health", help="GET / health check")
    p = subparsers.add_parser("check", help="POST /cron/check-crossings")
    p.add_argument("--all", action="store_true", help="Process every ticker now")
    subparsers.add_parser("tickers", help="GET /tickers")
    p = subparsers.add_parser("price", help="GET /tickers/{symbol}/price")
    p.add_argument("symbol", help="Ticker (e.g. AAPL)")

    p = subparsers.add_parser("run-batch", help="Run one batch in-process")
    p.add_argument("--all", action="store_true", help="Process every ticker now")
    subs = subparsers.add_parser("subscribers", help="Manage the subscriber sets")
    subs_sub = subs.add_subparsers(dest="subscribers_cmd", required=True)
    subs_sub.add_parser("list", help="List active subscribers")
    for name in ("add", "remove", "unsubscribe", "resubscribe"):
        p = subs_sub.add_parser(name, help=f"{name.capitalize()} an address")
        p.add_argument("email")
    p = subparsers.add_parser("unsub-link", help="Print the signed unsubscribe link")
    p.add_argument("email")

    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if args.command in ("run-batch", "subscribers", "unsub-link"):
        return run_local(args)

    handlers = {
        "health": cmd_health,
        "check": cmd_check,
        "tickers": cmd_tickers,
        "price": cmd_price,
    }
    try:
        with httpx.Client(base_url=args.base_url.rstrip("/"), timeout=args.timeout) as client:
            return handlers[args.command](client, args)
    except httpx.HTTPStatusError as e:
        print(f"HTTP error: {e.response.status_code}", file=sys.stderr)
        if e.response.content:
            try:
                print(e.response.json(), file=sys.stderr)
            except ValueError:
                print(e.response.text, file=sys.stderr)
        return 1
    except httpx.RequestError as e:
        print(f"Request error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
