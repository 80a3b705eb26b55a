"""``tasksync-server``: run the API under uvicorn."""

import os

import uvicorn

from .config import ENVIRONMENT


def main() -> None:
    uvicorn.run(
        "tasksync.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", "8000")),
        reload=ENVIRONMENT == "development",
    )


if __name__ == "__main__":
    main()
