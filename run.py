#!/usr/bin/env python3
"""
Start the Poker Night server.

Usage:
    python run.py [--host HOST] [--port PORT] [--reload] [--offline]

Settings such as the language model key are read from the environment or
a .env file; --offline forces the heuristic opponents for new sessions.
"""

import argparse
import os

import uvicorn

from pokernight.config import get_settings


def main():
    parser = argparse.ArgumentParser(description="Poker Night: Texas Hold'em against bots")
    parser.add_argument("--host", default="127.0.0.1", help="Interface to bind")
    parser.add_argument("--port", type=int, default=8000, help="Port to listen on")
    parser.add_argument("--reload", action="store_true", help="Restart on code changes")
    parser.add_argument("--offline", action="store_true", help="Ignore any language model key")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING... (default from POKERNIGHT_LOG_LEVEL)")
    args = parser.parse_args()

    # Environment overrides must be in place before settings are first read
    if args.offline:
        os.environ["POKERNIGHT_API_KEY"] = ""
        os.environ["API_KEY"] = ""
    if args.log_level:
        os.environ["POKERNIGHT_LOG_LEVEL"] = args.log_level.upper()
    settings = get_settings()

    print(f"Poker Night on http://{args.host}:{args.port} (opponents: {settings.default_mode.value})")
    uvicorn.run(
        "pokernight.server.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
