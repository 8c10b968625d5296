"""HTTP routers.

Every endpoint is wrapped by :func:`backend.src.routers.guard.route_guard`,
which turns controller failures into the route's fixed error envelope.
"""
