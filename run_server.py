#!/usr/bin/env python3
"""Start the Task Manager API under uvicorn.

Usage:
    python run_server.py                    # 127.0.0.1:8000 with hot-reload
    python run_server.py --no-reload --workers 4
    python run_server.py --storage memory   # Keep tasks in process memory
"""

import argparse
import os

import uvicorn


def main() -> None:
    parser = argparse.ArgumentParser(description="Start the Task Manager API")
    parser.add_argument("--host", default=os.getenv("HOST", "127.0.0.1"))
    parser.add_argument("--port", type=int, default=int(os.getenv("PORT", "8000")))
    parser.add_argument("--no-reload", action="store_true", help="Disable hot-reload")
    parser.add_argument(
        "--log-level",
        default=os.getenv("LOG_LEVEL", "info").lower(),
        choices=["critical", "error", "warning", "info", "debug"],
    )
    parser.add_argument(
        "--storage",
        choices=["sql", "memory"],
        help="Task store backend (default: STORAGE_BACKEND setting)",
    )
    parser.add_argument("--workers", type=int, help="Worker processes; disables hot-reload")
    args = parser.parse_args()

    # Settings are read from the environment, including by reload and worker subprocesses
    os.environ["LOG_LEVEL"] = args.log_level.upper()
    if args.storage is not None:
        os.environ["STORAGE_BACKEND"] = args.storage

    uvicorn.run(
        "task_manager.main:app",
        host=args.host,
        port=args.port,
        reload=not args.no_reload and args.workers is None,
        workers=args.workers,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
