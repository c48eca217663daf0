from sqlalchemy.orm import declarative_base

Base = declarative_base()

# Import models so Alembic can discover metadata
from launchpad.models import (  # noqa: E402,F401
    audit,
    fee_collection,
    launch,
    user,
)
