#!/usr/bin/env python3
"""
Storefront Backend Runner
=========================

Easy-to-use script to run the storefront backend in different modes.

Usage:
    python run_app.py                    # Development mode with auto-reload (default)
    python run_app.py --mode prod        # Production mode
    python run_app.py --port 8001        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
"""

import argparse
import os
import sys

from storefront.core.config import settings


def print_banner(host: str, port: int):
    """Print application banner"""
    banner = f"""
╔══════════════════════════════════════════════════════════╗
║   {settings.APP_NAME:<55}║
║   URL: http://{host}:{port:<42}║
║   Built-in account: {settings.ADMIN_EMAIL:<37}║
╚══════════════════════════════════════════════════════════╝
    """
    print(banner)


def check_environment():
    """Report on the local environment"""
    if os.path.exists(".env"):
        print("✅ .env file found")
    else:
        print("⚠️  .env file not found, using defaults")

    if settings.ADMIN_PASSWORD == "Password123":
        print("⚠️  ADMIN_PASSWORD is the default value, set it for any shared deployment")

    if settings.WORKERS > 1:
        print("⚠️  Sessions are kept in process memory, running a single worker")


def run_app(host: str, port: int, reload: bool):
    """Run the FastAPI application"""
    import uvicorn

    uvicorn.run(
        "storefront.main:app",
        host=host,
        port=port,
        reload=reload,
        workers=1,
        log_level=settings.LOG_LEVEL.lower(),
    )


def main():
    parser = argparse.ArgumentParser(
        description="Storefront Backend Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument(
        "--host",
        default=settings.HOST,
        help=f"Host to bind to (default: {settings.HOST})"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=settings.PORT,
        help=f"Port to bind to (default: {settings.PORT})"
    )
    parser.add_argument(
        "--no-reload",
        action="store_true",
        help="Disable auto-reload"
    )

    args = parser.parse_args()

    print_banner(args.host, args.port)
    check_environment()

    reload = not args.no_reload and args.mode != "prod"

    try:
        run_app(args.host, args.port, reload)
    except KeyboardInterrupt:
        print("\n👋 Server stopped by user")

    return 0


if __name__ == "__main__":
    sys.exit(main())
