from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from inventory.db.base import Base


class Item(Base):
    """SQLAlchemy model for an inventory item."""

    __tablename__ = "items"
    # Keep SQLite from handing out the id of a deleted last row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text(), nullable=False, default="")
    photo_ref: Mapped[str | None] = mapped_column(String(255), nullable=True)
