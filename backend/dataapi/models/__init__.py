"""ORM Models — SQLAlchemy declarative models for blob, batch and operator metadata.

Invariants:
    - All models inherit from Base (db/base.py)
    - Binary identifiers stored as 64-char lowercase hex primary keys

Design Decisions:
    - One file per aggregate for locality
    - All models imported here so Base.metadata is complete before create_all
      or alembic autogenerate runs
"""

from dataapi.models.blob_metadata import BlobMetadataRecord  # noqa: F401
from dataapi.models.batch import BatchHeaderRecord, AttestationRecord  # noqa: F401
from dataapi.models.operator import OperatorRecord, OperatorStakeRecord  # noqa: F401
