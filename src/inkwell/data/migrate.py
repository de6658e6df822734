"""Forward-only SQL migration runner.

Migrations are numbered ``.sql`` files, one directory per driver::

    migrations/
        sqlite/001_create_posts.sql
        postgresql/001_create_posts.sql

Applied migrations are tracked in an ``_inkwell_migrations`` table. A
failing migration stops the run; later migrations are not attempted.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from inkwell.data.database import Database
from inkwell.data.errors import MigrationError

MIGRATIONS_DIR = Path(__file__).parent / "migrations"

_TRACKING_TABLE = "_inkwell_migrations"

_CREATE_TRACKING_SQL = f"""
CREATE TABLE IF NOT EXISTS {_TRACKING_TABLE} (
    version    INTEGER PRIMARY KEY,
    name       TEXT    NOT NULL,
    applied_at TEXT    NOT NULL
)
"""


@dataclass(frozen=True, slots=True)
class Migration:
    """A single migration file."""

    version: int
    name: str
    sql: str


@dataclass(frozen=True, slots=True)
class MigrationResult:
    """Result of running migrations."""

    applied: list[str]
    already_applied: int
    total_available: int

    @property
    def summary(self) -> str:
        if not self.applied:
            return f"Already up to date ({self.already_applied} migrations applied)"
        applied_names = ", ".join(self.applied)
        return f"Applied {len(self.applied)} migration(s): {applied_names}"


@dataclass(frozen=True, slots=True)
class _Version:
    version: int


def discover_migrations(directory: str | Path) -> list[Migration]:
    """Discover and parse ``NNN_description.sql`` files, sorted by version."""
    path = Path(directory)
    if not path.is_dir():
        msg = f"Migration directory does not exist: {path}"
        raise MigrationError(msg)

    migrations: list[Migration] = []
    for sql_file in sorted(path.glob("*.sql")):
        name = sql_file.stem
        version_part, sep, _ = name.partition("_")
        if not sep:
            msg = f"Invalid migration filename: {sql_file.name} (expected NNN_description.sql)"
            raise MigrationError(msg)
        try:
            version = int(version_part)
        except ValueError:
            msg = f"Invalid migration version in {sql_file.name}: {version_part!r} is not an integer"
            raise MigrationError(msg) from None

        sql = sql_file.read_text(encoding="utf-8").strip()
        if not sql:
            msg = f"Empty migration file: {sql_file.name}"
            raise MigrationError(msg)
        migrations.append(Migration(version=version, name=name, sql=sql))

    versions = [m.version for m in migrations]
    if len(versions) != len(set(versions)):
        msg = "Duplicate migration version numbers found"
        raise MigrationError(msg)

    return sorted(migrations, key=lambda m: m.version)


async def migrate(db: Database, directory: str | Path | None = None) -> MigrationResult:
    """Apply pending migrations.

    Args:
        db: Database instance (connected on demand).
        directory: Migration directory. Defaults to the packaged migrations
            for the database's driver.

    Raises:
        MigrationError: If the directory is invalid or a migration fails.
    """
    migrations = discover_migrations(directory or MIGRATIONS_DIR / db.driver)
    await db.execute(_CREATE_TRACKING_SQL)
    rows = await db.fetch(_Version, f"SELECT version FROM {_TRACKING_TABLE}")
    applied_versions = {row.version for row in rows}

    applied_names: list[str] = []
    for migration in migrations:
        if migration.version in applied_versions:
            continue
        try:
            await db.execute_script(migration.sql)
            await db.execute(
                f"INSERT INTO {_TRACKING_TABLE} (version, name, applied_at) VALUES ($1, $2, $3)",
                migration.version,
                migration.name,
                datetime.now(UTC).isoformat(),
            )
        except Exception as exc:
            msg = f"Migration {migration.name} failed: {exc}"
            raise MigrationError(msg) from exc
        applied_names.append(migration.name)

    return MigrationResult(
        applied=applied_names,
        already_applied=len(applied_versions),
        total_available=len(migrations),
    )
