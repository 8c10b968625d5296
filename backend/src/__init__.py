"""FastAPI service for the Errand Platform.

This package provides REST API endpoints for agents, users, tasks,
registration, login and analytics, backed by MongoDB.
"""

__version__ = "1.0.0"
