"""Command line entry point: ``python -m sysstats``."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys

from sysstats import __version__
from sysstats.aggregator import SnapshotAggregator
from sysstats.core.config import APP_NAME, SERVER


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=APP_NAME, description="System telemetry aggregator")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING).",
    )
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Serve snapshots over HTTP.")
    serve.add_argument("--host", default=SERVER.host)
    serve.add_argument("--port", type=int, default=SERVER.port)

    snap = sub.add_parser("snapshot", help="Print snapshots as JSON and exit.")
    snap.add_argument("--passes", type=int, default=1, help="Number of aggregation passes.")
    snap.add_argument("--interval", type=float, default=1.0, help="Seconds between passes.")
    snap.add_argument("--indent", type=int, default=2)
    return parser


async def _print_snapshots(passes: int, interval: float, indent: int) -> None:
    aggregator = SnapshotAggregator()
    for index in range(max(1, passes)):
        if index:
            await asyncio.sleep(interval)
        snapshot = await aggregator.get_snapshot()
        print(json.dumps(snapshot.to_dict(), indent=indent, ensure_ascii=False))


def _serve(host: str, port: int) -> None:
    from sysstats.web.server import create_app

    server = create_app(host=host, port=port)
    print(f"{APP_NAME} {__version__} escuchando en {server.server_address()}/api/stats")
    print("Presiona Ctrl+C para detener")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        print("\nDeteniendo servidor...")
    finally:
        server.close()


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    if args.command == "serve":
        _serve(args.host, args.port)
    elif args.command == "snapshot":
        asyncio.run(_print_snapshots(args.passes, args.interval, args.indent))
    else:
        _build_parser().print_help(sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
