#!/usr/bin/env python3
"""
Wishlist Service Runner
=======================

Easy-to-use script to run the wishlist service in different modes.

Usage:
    python run_app.py                    # Development server with auto-reload (default)
    python run_app.py --mode prod        # Production mode, multiple workers
    python run_app.py --port 3003        # Custom port
    python run_app.py --host 127.0.0.1   # Custom host
    python run_app.py --init-db          # Create tables and exit
"""

import argparse
import asyncio
import os
import sys

def print_banner():
    """Print application banner"""
    banner = """
+-------------------------------------------------------+
|                   Wishlist Service                    |
|             wishlist + move-to-cart API               |
+-------------------------------------------------------+
    """
    print(banner)

def check_dependencies() -> bool:
    """Check if required dependencies are installed"""
    try:
        import fastapi  # noqa: F401
        import uvicorn  # noqa: F401
        print("FastAPI and Uvicorn are installed")
        return True
    except ImportError as e:
        print(f"Missing dependencies: {e}")
        print("Install them with: pip install -e .")
        return False

def check_environment():
    """Report on the local environment"""
    if os.path.exists(".env"):
        print(".env file found")
    else:
        print(".env file not found, using defaults")

def init_database():
    """Create the wishlist tables"""
    from app.core.database import init_db, close_db

    async def _run():
        await init_db()
        await close_db()

    asyncio.run(_run())
    print("Database initialized")

def run_app(host: str, port: int, reload: bool, workers: int):
    """Run the FastAPI application"""
    import uvicorn

    print(f"\nStarting Wishlist Service on {host}:{port}")
    print(f"API Docs: http://localhost:{port}/api/docs")
    print("\n" + "=" * 50)

    try:
        uvicorn.run(
            "app.main:app",
            host=host,
            port=port,
            reload=reload,
            workers=None if reload else workers,
            log_level="info"
        )
    except KeyboardInterrupt:
        print("\nServer stopped by user")

def main():
    from app.core.config import settings

    parser = argparse.ArgumentParser(
        description="Wishlist Service Runner",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--mode",
        choices=["dev", "prod"],
        default="dev",
        help="Server mode (default: dev)"
    )
    parser.add_argument("--host", default=settings.HOST, help=f"Host to bind to (default: {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"Port to bind to (default: {settings.PORT})")
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    parser.add_argument("--init-db", action="store_true", help="Create database tables and exit")

    args = parser.parse_args()

    print_banner()

    if not check_dependencies():
        return 1

    check_environment()

    if args.init_db:
        init_database()
        return 0

    reload = not args.no_reload and args.mode != "prod"
    workers = settings.WORKERS if args.mode == "prod" else 1
    run_app(args.host, args.port, reload, workers)
    return 0

if __name__ == "__main__":
    sys.exit(main())
