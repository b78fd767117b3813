"""Main CLI entry point."""

import argparse
import json
import logging
import sys
from pathlib import Path


def main() -> None:
    """Parse args and dispatch to subcommands."""
    parser = argparse.ArgumentParser(prog="quote-gateway", description="Carrier quote gateway")
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to settings YAML (default: $QUOTE_GATEWAY_CONFIG)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # serve
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", type=str, default=None, help="Bind address")
    serve_parser.add_argument("--port", type=int, default=None, help="Bind port")

    # quote
    quote_parser = subparsers.add_parser("quote", help="Request one quote from the carrier API")
    quote_parser.add_argument(
        "--input",
        type=Path,
        required=True,
        help="Quote request JSON file",
    )
    quote_parser.add_argument("--auth", type=str, required=True, help="Authorization value to pass through")
    quote_parser.add_argument(
        "--platform-code",
        type=str,
        required=True,
        help="X-Platform-Code value to pass through",
    )
    quote_parser.add_argument(
        "--db",
        type=Path,
        default=None,
        help="Path to SQLite database (default: from settings)",
    )
    quote_parser.add_argument(
        "--no-store",
        action="store_true",
        help="Do not persist the normalized offers",
    )
    quote_parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds to wait for the carrier (default: request_timeout from settings)",
    )
    quote_parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Write normalized JSON to file (default: stdout)",
    )

    # metrics
    metrics_parser = subparsers.add_parser("metrics", help="Price metrics over stored offers")
    metrics_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    metrics_parser.add_argument(
        "--last",
        type=int,
        default=None,
        help="Only the N most recently stored offers",
    )

    # store
    store_parser = subparsers.add_parser("store", help="Query the quote store")
    store_parser.add_argument(
        "action",
        choices=["list", "count"],
        help="List offers or show count",
    )
    store_parser.add_argument("--db", type=Path, default=None, help="Path to SQLite database")
    store_parser.add_argument(
        "--last",
        type=int,
        default=None,
        help="Only the N most recently stored offers (list)",
    )

    args = parser.parse_args()
    settings = _load_settings(args)
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "serve":
        _run_serve(args, settings)
    elif args.command == "quote":
        _run_quote(args, settings)
    elif args.command == "metrics":
        _run_metrics(args, settings)
    elif args.command == "store":
        _run_store(args, settings)
    else:
        parser.print_help()


def _load_settings(args: argparse.Namespace):
    from quote_gateway.config import Settings

    settings = Settings.load(getattr(args, "config", None))
    db = getattr(args, "db", None)
    if db is not None:
        settings = settings.model_copy(update={"db_path": db})
    return settings


def _run_serve(args: argparse.Namespace, settings) -> None:
    """Run serve command."""
    import uvicorn

    from quote_gateway.api import create_app

    app = create_app(settings=settings)
    uvicorn.run(
        app,
        host=args.host or settings.host,
        port=args.port or settings.port,
        log_level=settings.log_level.lower(),
    )


def _run_quote(args: argparse.Namespace, settings) -> None:
    """Run quote command."""
    import pydantic

    from quote_gateway.errors import GatewayError
    from quote_gateway.models import QuoteRequest, QuoteResponse
    from quote_gateway.pipeline import build_service

    try:
        request = QuoteRequest.model_validate_json(args.input.read_text(encoding="utf-8"))
    except pydantic.ValidationError as e:
        raise SystemExit(f"Invalid quote request in {args.input}:\n{e}")

    service = build_service(settings)
    try:
        offers = service.quote(
            request,
            args.auth,
            args.platform_code,
            timeout=getattr(args, "timeout", None),
            persist=not args.no_store,
        )
    except GatewayError as e:
        raise SystemExit(f"Quote failed: {e}")
    finally:
        service.close()

    output = json.dumps(QuoteResponse(carrier=offers).to_public(), indent=2, ensure_ascii=False)
    if args.output:
        args.output.write_text(output, encoding="utf-8")
        print(f"Wrote {len(offers)} offers to {args.output}")
    else:
        print(output)
    if not args.no_store:
        print(f"Store: {len(offers)} offers saved to {settings.db_path}", file=sys.stderr)


def _run_metrics(args: argparse.Namespace, settings) -> None:
    """Run metrics command."""
    from quote_gateway.errors import StoreError
    from quote_gateway.metrics import summarize
    from quote_gateway.store import QuoteStore

    try:
        store = QuoteStore(settings.db_path, timeout=settings.store_timeout)
        summary = summarize(store.read_all(args.last))
    except StoreError as e:
        raise SystemExit(f"Metrics failed: {e}")
    print(json.dumps(summary.rounded(settings.price_precision).model_dump(mode="json"), indent=2))


def _run_store(args: argparse.Namespace, settings) -> None:
    """Run store command."""
    from quote_gateway.errors import StoreError
    from quote_gateway.store import QuoteStore

    try:
        store = QuoteStore(settings.db_path, timeout=settings.store_timeout)
        if args.action == "list":
            offers = store.read_all(args.last)
            print(json.dumps([o.to_public() for o in offers], indent=2, ensure_ascii=False))
        elif args.action == "count":
            print(store.count())
    except StoreError as e:
        raise SystemExit(f"Store query failed: {e}")


if __name__ == "__main__":
    main()
