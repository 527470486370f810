"""
Core utilities shared across the todo service.

This package hosts:
- configuration helpers (env vars, retry budget, bind address)
- the error taxonomy used by repositories and routers
- logging setup
"""
