"""The `MetaData` every SHELTER table attaches to.

Constraint and index names are derived from a naming convention so that
`metadata.create_all()` (tests) and the Alembic migration (production)
produce the same names, e.g. ``pk_favorites`` and ``ix_favorites_user_id``.
"""

from sqlalchemy import MetaData

metadata = MetaData(
    naming_convention={
        "pk": "pk_%(table_name)s",
        "ix": "ix_%(table_name)s_%(column_0_N_label)s",
        "uq": "uq_%(table_name)s_%(column_0_N_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
    }
)
