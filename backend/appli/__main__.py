"""Run the packaged application: `python -m appli [--host H] [--port P]`.

Process arguments are handed to Uvicorn; defaults come from settings.
"""

import argparse

import uvicorn

from .config import settings


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="appli", description="Run the appli web application.")
    parser.add_argument("--host", default=settings.HOST, help="bind host (default: %(default)s)")
    parser.add_argument("--port", type=int, default=settings.PORT, help="bind port (default: %(default)s)")
    parser.add_argument("--log-level", default=settings.LOG_LEVEL.lower(), help="server log level")
    parser.add_argument("--reload", action="store_true", help="reload on code changes (development only)")
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    uvicorn.run(
        "appli.main:app",
        host=args.host,
        port=args.port,
        log_level=args.log_level,
        reload=args.reload,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
