"""
rd_orms.api.services

Static definitions of the placeholder services.

Responsibilities:
- Describe each stub service (response body, port variable, default port).
- Resolve a service by key.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from rd_orms.settings import port_from_env


@dataclass(frozen=True, slots=True)
class ServiceDefinition:
    key: str
    title: str
    body: str
    port_env: str
    default_port: int

    def resolve_port(self, environ: Mapping[str, str] | None = None) -> int:
        return port_from_env(self.port_env, self.default_port, environ)


_DEFINITIONS = (
    ServiceDefinition("root", "Root Service", "Hello World", "SERVICE_PORT", 3000),
    ServiceDefinition("prisma", "Prisma Service", "Prisma Service", "SERVICE_PORT_PRISMA", 3001),
    ServiceDefinition("typeorm", "TypeORM Service", "TypeORM Service", "SERVICE_PORT_TYPEORM", 3002),
    ServiceDefinition(
        "sequelize", "Sequelize Service", "Sequelize Service", "SERVICE_PORT_SEQUELIZE", 3003
    ),
    ServiceDefinition("drizzle", "Drizzle Service", "Drizzle Service", "SERVICE_PORT_DRIZZLE", 4004),
)

SERVICES: Mapping[str, ServiceDefinition] = MappingProxyType({d.key: d for d in _DEFINITIONS})


class UnknownServiceError(LookupError):
    def __init__(self, key: str) -> None:
        super().__init__(f"Unknown service: {key}. Must be one of: {', '.join(SERVICES)}")
        self.key = key


def get_service(key: str) -> ServiceDefinition:
    try:
        return SERVICES[key]
    except KeyError:
        raise UnknownServiceError(key) from None


# --- Module Notes -----------------------------------------------------------
# Default ports are pairwise distinct so all five services can run side by side.
