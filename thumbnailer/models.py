"""SQLAlchemy 2.0 ORM models.

All models use the Mapped[type] annotation pattern required by SQLAlchemy 2.0.

The pipeline writes a single table:

    images(
        id        auto-increment primary key,
        filename  varchar(255) not null,
        data      binary not null
    )

``filename`` is deliberately not unique: the same destination name may be
stored more than once as independent rows.
"""

from sqlalchemy import Integer, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from thumbnailer.constants import FILENAME_MAX_LENGTH, IMAGES_TABLE_NAME


class Base(DeclarativeBase):
    """Declarative base for all models."""

    pass


class StoredImage(Base):
    """A resized thumbnail persisted as a binary blob.

    Attributes:
        id: Surrogate primary key (SERIAL on PostgreSQL)
        filename: Destination name of the work item (e.g., "a1b2c3d4-000001.jpg")
        data: JPEG-encoded thumbnail bytes

    NEVER log ``data``; it is the full image payload.
    """

    __tablename__ = IMAGES_TABLE_NAME

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    filename: Mapped[str] = mapped_column(String(FILENAME_MAX_LENGTH), nullable=False)
    data: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)

    def __repr__(self) -> str:
        return f"<StoredImage(id={self.id}, filename={self.filename!r})>"
