from logging.config import fileConfig

from sqlalchemy import create_engine, pool
from alembic import context

from app.core.config import get_settings
from app.models.base import Base
from app.models import tenant_global  # noqa: F401
from app.models import user  # noqa: F401
from app.core import entity_graph  # noqa: F401  (imports every tenant-scoped model)

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

target_metadata = Base.metadata
settings = get_settings()


def _is_pooler_url(url: str) -> bool:
    return ":6543" in url or "pooler.supabase.com" in url


def include_object(obj, name, type_, reflected, compare_to):
    """
    Autogenerate only looks at our own tables.

    The database is shared with other services (billing, auth providers);
    a reflected table we do not model must never show up as a drop.
    """
    if type_ == "table" and reflected and compare_to is None:
        return False
    return True


def run_migrations_offline() -> None:
    """Emit SQL for the lifecycle schema without a connection."""
    context.configure(
        url=settings.database_url,
        target_metadata=target_metadata,
        include_object=include_object,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    url = settings.database_url
    connect_args: dict = {}
    if _is_pooler_url(url):
        # transaction poolers reject server-side prepared statements
        connect_args["prepare_threshold"] = None

    connectable = create_engine(
        url,
        future=True,
        poolclass=pool.NullPool,
        connect_args=connect_args,
    )

    with connectable.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            include_object=include_object,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
