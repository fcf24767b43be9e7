"""
HTTP layer: app-level middleware, exception handlers and non-auth routes.
"""
