#!/usr/bin/env python
"""Script to run the TaskSync API server."""
from tasksync.server import main

if __name__ == "__main__":
    main()
