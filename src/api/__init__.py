"""
Package marker for the HTTP layer in `src.api`.
It groups the FastAPI app, configuration, routers, and schemas under a stable import path.
"""
