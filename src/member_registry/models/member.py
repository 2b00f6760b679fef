from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from member_registry.database.base import Base


class Member(Base):
    """
    SQLAlchemy model for a registered Member.

    `name` and `email` carry UNIQUE constraints. The registration pipeline
    checks them before inserting, and the constraints catch any duplicate
    that slips in between that check and the insert.
    """
    __tablename__ = "members"

    # Identity assigned by the database on insert
    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True
    )

    # Display name, at most 25 characters, no digits
    name: Mapped[str] = mapped_column(
        String(25),
        unique=True,
        nullable=False
    )

    # Email address, stored lower-cased
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False
    )

    # Optional phone number, 10 to 12 digits
    phone: Mapped[str | None] = mapped_column(
        String(12),
        nullable=True
    )

    def __repr__(self) -> str:
        return f"<Member(id={self.id!r}, name={self.name!r}, email={self.email!r})>"
