"""Command-line launcher for the session server and benchmark."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="grid-snake",
        description="Grid Snake session server and simulation tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)
    serve_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON engine config file.",
    )
    serve_p.add_argument("--cols", type=_positive_int, default=None)
    serve_p.add_argument("--rows", type=_positive_int, default=None)
    serve_p.add_argument("--base-speed", type=float, default=None)
    serve_p.add_argument(
        "--highscore-file", type=str, default=None,
        help="JSON file persisting the high score across restarts.",
    )

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure headless simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=_positive_int, default=100)
    bench_p.add_argument("--cols", type=_positive_int, default=20)
    bench_p.add_argument("--rows", type=_positive_int, default=20)
    bench_p.add_argument("--max-ticks", type=_positive_int, default=500)
    bench_p.add_argument("--seed", type=int, default=42)

    return parser


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from grid_snake.config import EngineConfig
    from grid_snake.server.app import create_app

    config = EngineConfig.load(args.config) if args.config else EngineConfig()
    config = config.replace(
        cols=args.cols, rows=args.rows, base_speed=args.base_speed,
    )
    app = create_app(config, high_score_path=args.highscore_file)
    logger.info("Serving on http://%s:%d", args.host, args.port)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from grid_snake.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.num_games,
        cols=args.cols,
        rows=args.rows,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``grid-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "serve": _run_serve,
        "benchmark": _run_benchmark,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
