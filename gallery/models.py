"""
Pydantic models for the category map and the MiniSearch index.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .config import KEYWORDS_FIELD, TITLE_FIELD


class Section(BaseModel):
    """A gallery category as declared in src/index.json."""

    title: str = Field(..., min_length=1)
    pages: Optional[list[str]] = Field(
        default=None,
        description="Explicit page ids; when omitted, pages are matched by keyword",
    )
    description: Optional[str] = None


class CategoryFile(BaseModel):
    """The src/index.json file: ordered [word, section] pairs."""

    sections: list[tuple[str, Section]]

    @field_validator("sections")
    @classmethod
    def validate_unique_words(cls, v: list[tuple[str, Section]]) -> list[tuple[str, Section]]:
        words = [word for word, _ in v]
        duplicates = sorted({w for w in words if words.count(w) > 1})
        if duplicates:
            raise ValueError(f"Duplicate category words: {', '.join(duplicates)}")
        return v


class Document(BaseModel):
    """One page of the site, as shown on a gallery card."""

    id: str
    title: str
    light: Optional[str] = None
    dark: Optional[str] = None


class MinisearchIndex(BaseModel):
    """
    The subset of MiniSearch's ``toJSON()`` output that the gallery reads.

    ``index`` is a list of ``[term, {fieldId: {shortId: frequency}}]``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    document_ids: dict[str, str] = Field(..., alias="documentIds")
    stored_fields: dict[str, Optional[dict]] = Field(default_factory=dict, alias="storedFields")
    field_ids: Optional[dict[str, int]] = Field(default=None, alias="fieldIds")
    index: list[tuple[str, dict[str, dict[str, int]]]] = Field(default_factory=list)

    def short_ids(self) -> list[str]:
        """Short ids in numeric order."""
        return sorted(self.document_ids, key=short_id_key)

    def field_id(self, name: str) -> Optional[str]:
        """Field id for ``name``; None when the index has no such field."""
        if self.field_ids is not None:
            return str(self.field_ids[name]) if name in self.field_ids else None
        return {"title": TITLE_FIELD, "keywords": KEYWORDS_FIELD}[name]


def short_id_key(short_id: str):
    """Sort key ordering integer short ids numerically."""
    return (0, int(short_id)) if short_id.isdigit() else (1, short_id)
