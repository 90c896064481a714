#!/usr/bin/env python
"""
Start the to-do API under uvicorn.

    python run_api.py                     # HOST/PORT from the environment
    python run_api.py --reload            # restart on code changes
    python run_api.py --host 127.0.0.1 --port 9000

Command-line flags take precedence over Settings.
"""

import argparse
import uvicorn

from shared.config import get_settings


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve the to-do sharing API")
    parser.add_argument("--host", help="Interface to bind (default: HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: PORT)")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    settings = get_settings()

    uvicorn.run(
        "api.app:app",
        host=args.host or settings.host,
        port=args.port or settings.port,
        reload=args.reload or settings.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
