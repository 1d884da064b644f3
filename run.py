#!/usr/bin/env python
"""
Essay Grader - start the API server

    python run.py                         # host/port from settings (.env)
    python run.py --port 8080 --reload
    essay-grader --log-level debug        # installed console script
"""
import argparse

import uvicorn

from essay_grader.config import settings

BANNER = """
================================================================
  Essay Grader API
----------------------------------------------------------------
  Listening:        http://{host}:{port}
  Docs:             http://{host}:{port}/docs
  Text generation:  {provider}
  Essays folder:    {essays}
  Auto-reload:      {reload}
================================================================
"""


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the Essay Grader API server")
    parser.add_argument("--host", default=settings.HOST, help=f"bind address (default {settings.HOST})")
    parser.add_argument("--port", type=int, default=settings.PORT, help=f"port (default {settings.PORT})")
    parser.add_argument("--reload", action="store_true", help="restart on code changes")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=["critical", "error", "warning", "info", "debug"],
        help="uvicorn log level",
    )
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    print(BANNER.format(
        host=args.host,
        port=args.port,
        provider=settings.LLM_PROVIDER,
        essays=settings.essays_dir,
        reload="on" if args.reload else "off",
    ))
    uvicorn.run(
        "essay_grader.main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.log_level,
    )


if __name__ == "__main__":
    main()
