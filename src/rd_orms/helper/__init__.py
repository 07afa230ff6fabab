"""
rd_orms.helper

Orchestration helper for the per-ORM databases and services.

Responsibilities:
- Validate helper invocations and dispatch them to `docker compose`, `pnpm` and `dotenv`.
"""
