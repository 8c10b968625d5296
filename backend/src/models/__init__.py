"""Data models for the errand backend.

This package contains Pydantic models for request/response validation
and the document shapes stored in MongoDB.
"""
