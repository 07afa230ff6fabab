"""
rd_orms.observability

Observability package.

Responsibilities:
- Structured logging configuration shared by the stub services and the helper CLI.
- Request context propagation for consistent log enrichment.
"""

# Package marker.
