"""Command line front end for the task list view.

    tasksync-view --base-url http://localhost:8000 --token <jwt>
"""

import argparse
import asyncio
import sys
from typing import Optional, Sequence

import httpx

from ..config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS, TASKS_PATH
from ..logging_setup import configure_logging
from .view import Phase, TaskListView


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasksync-view",
        description="Fetch and print the tasks owned by the signed-in user.",
    )
    parser.add_argument("--base-url", default=API_BASE_URL, help="API root (default: %(default)s)")
    parser.add_argument("--path", default=TASKS_PATH, help="Task list path (default: %(default)s)")
    parser.add_argument("--token", default=None, help="Bearer token from /api/auth/signin")
    parser.add_argument(
        "--timeout",
        type=float,
        default=REQUEST_TIMEOUT_SECONDS,
        help="Request timeout in seconds (default: %(default)s)",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level (default: %(default)s)")
    return parser


async def run_view(
    base_url: str,
    path: str = TASKS_PATH,
    token: Optional[str] = None,
    timeout: float = REQUEST_TIMEOUT_SECONDS,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> TaskListView:
    headers = {"Authorization": f"Bearer {token}"} if token else {}
    async with httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=timeout,
        transport=transport,
    ) as client:
        view = TaskListView(client, path=path)
        await view.mount()
        view.unmount()
    return view


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(level=args.log_level, stream=sys.stderr)

    view = asyncio.run(run_view(args.base_url, args.path, args.token, args.timeout))
    print(view.render_text())
    return 1 if view.state.phase is Phase.FAILED else 0


if __name__ == "__main__":
    sys.exit(main())
