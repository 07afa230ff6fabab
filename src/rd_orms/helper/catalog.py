"""
rd_orms.helper.catalog

Static catalog of the supported ORMs.

Responsibilities:
- Hold the ordered ORM identifiers and their package-manager service names.
- Validate targets against the closed set plus the `all` sentinel.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

ALL = "all"


@dataclass(frozen=True, slots=True)
class OrmCatalog:
    """
    Immutable ORM -> service-name table.

    Order of `orms` is the fan-out order for the `all` target.
    """

    service_names: Mapping[str, str]
    orms: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        names = dict(self.service_names)
        if not names:
            raise ValueError("catalog needs at least one ORM")
        if ALL in names:
            raise ValueError(f"'{ALL}' is reserved for the fan-out target")
        if len(set(names.values())) != len(names):
            raise ValueError("service names must be unique per ORM")
        object.__setattr__(self, "service_names", MappingProxyType(names))
        object.__setattr__(self, "orms", tuple(names))

    @property
    def targets(self) -> tuple[str, ...]:
        return (*self.orms, ALL)

    def is_target(self, value: str) -> bool:
        return value == ALL or value in self.service_names

    def service_name(self, orm: str) -> str:
        return self.service_names[orm]


def default_catalog() -> OrmCatalog:
    return OrmCatalog(
        {
            "prisma": "@rd-node-orms/prisma-service",
            "typeorm": "@rd-node-orms/typeorm-service",
            "sequelize": "@rd-node-orms/sequelize-service",
            "drizzle": "@rd-node-orms/drizzle-service",
        }
    )
