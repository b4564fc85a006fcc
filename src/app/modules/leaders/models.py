"""
Leader Models
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from app.modules.shared import BaseModel


class Leader(BaseModel):
    """
    Leadership directory entry.

    ``leader_id`` is the public numeric identifier used in URLs; the UUID
    primary key stays internal.
    """

    __tablename__ = "leaders"

    leader_id: Mapped[int] = mapped_column(Integer, unique=True, nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(200), nullable=False, default="")
    image: Mapped[str] = mapped_column(String(1000), nullable=False, default="")
    linkedin: Mapped[str] = mapped_column(String(500), nullable=False, default="#")
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    phone: Mapped[str] = mapped_column(String(30), nullable=False, default="")
    profession: Mapped[str] = mapped_column(String(200), nullable=False, default="")
