"""API route modules.

Handlers that reach the services are plain ``def``: the services block on
repository locks and audit file writes, so FastAPI runs them in its
threadpool instead of on the event loop.
"""
