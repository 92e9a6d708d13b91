#!/usr/bin/env python3
"""Run the API locally with auto-reload."""
import argparse
import sys
from pathlib import Path

import uvicorn

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.append(str(project_root))

from lifematch.core.config import settings  # noqa: E402


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="LifeMatch development server")
    parser.add_argument("--host", default="localhost")
    parser.add_argument("--port", type=int, default=60000)
    parser.add_argument("--no-reload", action="store_true", help="Disable auto-reload")
    return parser.parse_args(argv)


def run_server(argv=None) -> None:
    """Run the development server."""
    args = parse_args(argv)
    uvicorn.run(
        "lifematch.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload,
        reload_dirs=[str(project_root / "lifematch")],
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run_server()
