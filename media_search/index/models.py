"""SQLAlchemy ORM models for the local search index."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class IndexBase(DeclarativeBase):
    """Base class for index ORM models."""

    pass


class IndexDocument(IndexBase):
    """One searchable entity (artist, album or song) and its key fields."""

    __tablename__ = "documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    index_type: Mapped[str] = mapped_column(String(32), nullable=False)
    ref: Mapped[str] = mapped_column(String(512), nullable=False)
    artist: Mapped[str | None] = mapped_column(Text)
    album: Mapped[str | None] = mapped_column(Text)
    title: Mapped[str | None] = mapped_column(Text)
    genre: Mapped[str | None] = mapped_column(Text)
    media_type: Mapped[str | None] = mapped_column(String(32))
    year: Mapped[int | None] = mapped_column(Integer)
    folder: Mapped[str | None] = mapped_column(Text)
    folder_id: Mapped[int | None] = mapped_column(Integer)

    terms: Mapped[list[IndexTerm]] = relationship(
        back_populates="document",
        cascade="all, delete-orphan",
        order_by="IndexTerm.position",
    )

    __table_args__ = (
        UniqueConstraint("index_type", "ref", name="uq_documents_type_ref"),
        Index("ix_documents_folder", "folder"),
        Index("ix_documents_folder_id", "folder_id"),
        Index("ix_documents_genre", "genre"),
        Index("ix_documents_year", "year"),
    )

    def __repr__(self) -> str:
        return f"<IndexDocument(type='{self.index_type}', ref='{self.ref}')>"


class IndexTerm(IndexBase):
    """Analyzed token of a tokenized document field."""

    __tablename__ = "terms"

    doc_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("documents.id", ondelete="CASCADE"),
        primary_key=True,
    )
    field: Mapped[str] = mapped_column(String(32), primary_key=True)
    position: Mapped[int] = mapped_column(Integer, primary_key=True)
    term: Mapped[str] = mapped_column(String(256), nullable=False)

    document: Mapped[IndexDocument] = relationship(back_populates="terms")

    __table_args__ = (Index("ix_terms_field_term", "field", "term"),)

    def __repr__(self) -> str:
        return f"<IndexTerm(doc_id={self.doc_id}, {self.field}:{self.term})>"


# Index field name -> IndexDocument attribute holding its raw value.
FIELD_TO_ATTRIBUTE: dict[str, str] = {
    "artist": "artist",
    "album": "album",
    "title": "title",
    "genre": "genre",
    "year": "year",
    "mediaType": "media_type",
    "folder": "folder",
    "folderId": "folder_id",
}
