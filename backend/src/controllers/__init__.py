"""Resource controllers.

Each module owns the create/read/query operations of one resource. A
controller returns resource-shaped output or raises; domain errors carry
their own status, anything else is answered by the route boundary.
"""
