"""Mini README: Interactive interfaces for the finance tracker.

Exports the FastAPI application factory that powers the browser dashboard.
The CLI entry point in ``main_finance_tracker.py`` launches it under uvicorn.
"""

from .web_app import create_application

__all__ = ["create_application"]
