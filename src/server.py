"""Uvicorn runner for the storefront API.

Usage:
    python src/server.py                        # development defaults
    python src/server.py --env production --port 8080
    python src/server.py --reload
"""

import argparse
import os

import uvicorn


def main(argv=None):
    parser = argparse.ArgumentParser(description="TurboDrink storefront server")
    parser.add_argument("--host", default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)
    parser.add_argument(
        "--env",
        choices=["development", "test", "staging", "production"],
        help="Config environment (overrides PROTEAN_ENV)",
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    args = parser.parse_args(argv)

    # Set before the app module is imported so the domain config and logging see it
    if args.env:
        os.environ["PROTEAN_ENV"] = args.env

    uvicorn.run(
        "app:app",
        app_dir=os.path.dirname(os.path.abspath(__file__)),
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_config=None,
    )


if __name__ == "__main__":
    main()
