"""
High-level use cases for the todo service.

The store factory orchestrates backend selection, connection and schema setup
so that routers only ever see a ready ItemStore.
"""
