"""SQLAlchemy Core metadata for the web app's ``zoos`` and ``animals`` tables."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import Column, Float, ForeignKey, MetaData, String, Table, Text, text

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "pk": "pk_%(table_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    }
)

zoos_table = Table(
    "zoos",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("city", Text, nullable=True),
    Column("country", Text, nullable=False),
    Column("latitude", Float, nullable=True),
    Column("longitude", Float, nullable=True),
    Column("website_url", Text, nullable=True),
    Column("animals_generated_at", Text, nullable=True),
    Column("created_at", Text, server_default=text("CURRENT_TIMESTAMP")),
    # References users(id) in the web app; users are not managed here.
    Column("created_by_user_id", String, nullable=True),
)

animals_table = Table(
    "animals",
    metadata,
    Column("id", Text, primary_key=True),
    Column("zoo_id", Text, ForeignKey("zoos.id", ondelete="CASCADE"), nullable=False),
    Column("common_name", Text, nullable=False),
    Column("scientific_name", Text, nullable=True),
    Column("category", Text, nullable=False),
    Column("exhibit_area", Text, nullable=True),
    # JSON array of fun facts
    Column("fun_fact", Text, nullable=True),
    Column("image_url", Text, nullable=True),
    Column("created_at", Text, server_default=text("CURRENT_TIMESTAMP")),
)


def create_zoo_tables(engine: Engine) -> None:
    """Create the ``zoos`` and ``animals`` tables when they do not exist yet."""

    metadata.create_all(engine)
