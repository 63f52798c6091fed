"""Launch script for the Zeus rules service."""

import argparse
import os

import uvicorn

from ..config import CONFIG_PATHS_ENV


def main(argv=None):
    """Start the API server."""
    parser = argparse.ArgumentParser(description="Serve Zeus rules games over HTTP")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument("--reload", action="store_true")
    parser.add_argument("--log-level", default="info")
    parser.add_argument("--config", action="append", default=[], help="Rules config file (YAML or JSON); repeatable")
    args = parser.parse_args(argv)

    if args.config:
        # uvicorn imports the app itself, possibly in a reloader child.
        os.environ[CONFIG_PATHS_ENV] = os.pathsep.join(args.config)

    print("=" * 70)
    print("Zeus Rules Service")
    print("=" * 70)
    print(f"\nListening on http://{args.host}:{args.port}")
    if args.config:
        print(f"Rules config: {', '.join(args.config)}")
    print("Press Ctrl+C to stop the server")
    print("=" * 70 + "\n")

    uvicorn.run(
        "zeus_rules.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
