"""Authorization-scoped task listing: FastAPI query service and async task list view."""

__version__ = "1.0.0"
