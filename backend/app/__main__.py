"""
Run one of the services with uvicorn.

    python -m app board        # app.main:app
    python -m app summarizer   # app.main:summarizer_app

HOST and PORT come from settings (env / .env); --host/--port override them.
"""

import argparse

import uvicorn

from app.config import settings

APPS = {
    "board": "app.main:app",
    "summarizer": "app.main:summarizer_app",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="python -m app", description="Run a NoteShare service.")
    parser.add_argument("service", choices=sorted(APPS), help="which service to run")
    parser.add_argument("--host", default=settings.host, help=f"bind address (default {settings.host})")
    parser.add_argument("--port", type=int, default=settings.port, help=f"port (default {settings.port})")
    parser.add_argument("--reload", action="store_true", help="reload on code changes (development)")
    return parser


def main(argv=None) -> None:
    args = build_parser().parse_args(argv)
    uvicorn.run(
        APPS[args.service],
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
