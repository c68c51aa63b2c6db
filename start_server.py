#!/usr/bin/env python3
"""Launch the account service.

Usage:
    ./start_server.py              # Host/port from ACCOUNTS_HOST / ACCOUNTS_PORT
    ./start_server.py --port 8080  # Use custom port
"""

import argparse
import sys

from accounts.config import get_settings


def main():
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Launch the user account service")
    parser.add_argument("--port", type=int, default=settings.port, help=f"Server port (default: {settings.port})")
    parser.add_argument("--host", default=settings.host, help=f"Server host (default: {settings.host})")
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args()

    try:
        import uvicorn
    except ImportError:
        print("""
ERROR: Server dependencies not installed.

Install them with:
    pip install -e .
""")
        sys.exit(1)

    print(f"Account service '{settings.service_name}' running at http://{args.host}:{args.port}")
    print("Press Ctrl+C to stop")

    uvicorn.run("accounts.server:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
    main()
