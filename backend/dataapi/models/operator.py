"""Operator ORM — registered operators, their sockets and per-quorum stake.

Invariants:
    - One OperatorStakeRecord per (operator_id, quorum_id)
    - stake stored as a decimal string: on-chain stakes exceed 64-bit integers
    - node_version is None until a host scan has recorded one
"""

from sqlalchemy import ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from dataapi.db.base import Base


class OperatorRecord(Base):
    __tablename__ = "operators"

    operator_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    dispersal_socket: Mapped[str] = mapped_column(String(255), nullable=False)
    retrieval_socket: Mapped[str] = mapped_column(String(255), nullable=False)
    v2_dispersal_socket: Mapped[str | None] = mapped_column(String(255), nullable=True)
    v2_retrieval_socket: Mapped[str | None] = mapped_column(String(255), nullable=True)
    node_version: Mapped[str | None] = mapped_column(String(64), nullable=True)

    stakes: Mapped[list["OperatorStakeRecord"]] = relationship(
        "OperatorStakeRecord", back_populates="operator",
        cascade="all, delete-orphan", lazy="selectin",
    )


class OperatorStakeRecord(Base):
    __tablename__ = "operator_stakes"

    operator_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("operators.operator_id"), primary_key=True,
    )
    quorum_id: Mapped[int] = mapped_column(Integer, primary_key=True)
    stake: Mapped[str] = mapped_column(String(80), nullable=False)

    operator: Mapped["OperatorRecord"] = relationship(
        "OperatorRecord", back_populates="stakes",
    )
