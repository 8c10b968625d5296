"""Business logic services.

This package contains service classes shared by several controllers,
such as credential hashing and token issuance.
"""
