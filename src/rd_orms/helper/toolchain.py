"""
rd_orms.helper.toolchain

Invocation shapes of the external tools.

Responsibilities:
- Build `docker compose` commands that run inside an ORM's package directory.
- Build dotenv-wrapped package-manager commands filtered to an ORM's service.
"""

from __future__ import annotations

import shlex
from dataclasses import dataclass
from pathlib import Path

from rd_orms.helper.catalog import OrmCatalog
from rd_orms.helper.commands import ExternalCommand
from rd_orms.settings import Settings


@dataclass(frozen=True, slots=True)
class Toolchain:
    catalog: OrmCatalog
    root_dir: Path
    packages_dir: Path
    env_file: str
    compose: tuple[str, ...]
    package_manager: tuple[str, ...]
    dotenv: tuple[str, ...]

    @classmethod
    def from_settings(cls, settings: Settings, catalog: OrmCatalog) -> Toolchain:
        root = settings.root_dir.resolve()
        return cls(
            catalog=catalog,
            root_dir=root,
            packages_dir=root / settings.packages_dir,
            env_file=settings.env_file,
            compose=tuple(shlex.split(settings.compose_command)),
            package_manager=tuple(shlex.split(settings.package_manager)),
            dotenv=tuple(shlex.split(settings.dotenv_command)),
        )

    def package_dir(self, orm: str) -> Path:
        # KeyError here means validation was skipped upstream.
        self.catalog.service_name(orm)
        return self.packages_dir / orm

    def db_up(self, orm: str) -> ExternalCommand:
        return ExternalCommand((*self.compose, "up", "-d"), cwd=self.package_dir(orm))

    def db_down(self, orm: str) -> ExternalCommand:
        return ExternalCommand((*self.compose, "down"), cwd=self.package_dir(orm))

    def db_reset(self, orm: str) -> ExternalCommand:
        compose = shlex.join(self.compose)
        return ExternalCommand.script(
            f"{compose} down -v && {compose} up -d", cwd=self.package_dir(orm)
        )

    def service_task(self, orm: str, task: str) -> ExternalCommand:
        # The env file is only ever loaded for service tasks, never for database ones.
        return ExternalCommand(
            (
                *self.dotenv,
                "-e",
                self.env_file,
                "--",
                *self.package_manager,
                "--filter",
                self.catalog.service_name(orm),
                task,
            ),
            cwd=self.root_dir,
        )


# --- Module Notes -----------------------------------------------------------
# Service tasks run from the repository root, where the workspace package manager and
# the relative env file are resolved.
