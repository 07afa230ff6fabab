"""
rd_orms.api

HTTP layer for the placeholder services.

Responsibilities:
- App factory, the single greeting route, and the uvicorn entrypoint.
"""
