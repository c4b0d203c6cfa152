"""SQLAlchemy Core definition of the ``cats`` table.

The table is owned and populated outside this application; the definition is
used to build the listing query and to create the table in tests.
"""

from sqlalchemy import Column, Integer, MetaData, String, Table

metadata = MetaData()

cats = Table(
    "cats",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("name", String, nullable=False),
    Column("image_path", String, nullable=False),
)
