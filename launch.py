import argparse
import logging
import os

from logic import end, info, move, start

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Run the Battlesnake server")
    parser.add_argument("--host", type=str, default=os.environ.get("HOST", "0.0.0.0"),
                        help="Interface to bind (env HOST)")
    # String defaults go through `type`, so a bad PORT is a usage error
    parser.add_argument("--port", type=int, default=os.environ.get("PORT", "8000"),
                        help="Port to listen on (env PORT)")
    parser.add_argument("--log-dir", type=str, default=os.environ.get("BATTLESNAKE_LOG_DIR"),
                        help="Write every request to <log-dir>/<game>.jsonl (env BATTLESNAKE_LOG_DIR)")
    parser.add_argument("--log-level", type=str.upper, default=os.environ.get("LOG_LEVEL", "INFO"),
                        choices=LOG_LEVELS,
                        help="Logging level (env LOG_LEVEL)")
    args = parser.parse_args(argv)
    # choices are not checked against defaults
    if args.log_level not in LOG_LEVELS:
        parser.error(f"invalid LOG_LEVEL {args.log_level!r} (choose from {', '.join(LOG_LEVELS)})")
    return args


def main(argv=None):
    from server import run_server

    args = parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)-7s %(name)s: %(message)s",
    )
    run_server(
        {"info": info, "start": start, "move": move, "end": end},
        host=args.host,
        port=args.port,
        log_dir=args.log_dir,
    )


if __name__ == "__main__":
    main()
