"""
Pydantic models for seed fixtures, media files and run reports.
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FixtureRecord(BaseModel):
    """Base for fixture records; unknown CMS fields pass through untouched"""
    model_config = ConfigDict(extra="allow")

    def to_entry(self) -> Dict[str, Any]:
        """Fields to send to Strapi; fixture ids are references only, never persisted"""
        entry = self.model_dump(exclude_none=True)
        entry.pop("id", None)
        return entry


class Category(FixtureRecord):
    name: str


class Author(FixtureRecord):
    name: str
    avatar: Optional[str] = None


class Article(FixtureRecord):
    title: Optional[str] = None
    slug: str
    blocks: List[Dict[str, Any]] = Field(default_factory=list)
    category: Optional[Dict[str, Any]] = None
    author: Optional[Dict[str, Any]] = None


class GlobalSettings(FixtureRecord):
    defaultSeo: Dict[str, Any] = Field(default_factory=dict)


class About(FixtureRecord):
    blocks: List[Dict[str, Any]] = Field(default_factory=list)


class SeedFixture(BaseModel):
    """The five record sets of data.json"""
    categories: List[Category] = Field(default_factory=list)
    authors: List[Author] = Field(default_factory=list)
    articles: List[Article] = Field(default_factory=list)
    global_: GlobalSettings = Field(default_factory=GlobalSettings, alias="global")
    about: About = Field(default_factory=About)

    model_config = ConfigDict(populate_by_name=True)


class FileData(BaseModel):
    """A media file located on local disk, ready for upload"""
    filepath: str
    original_file_name: str
    size: int
    mimetype: str


class UploadedFile(BaseModel):
    """A file record from the Strapi media library"""
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    url: Optional[str] = None
    mime: Optional[str] = None
    size: Optional[float] = None


class SeedReport(BaseModel):
    """Summary of one seed run"""
    state: str
    skipped: bool = False
    completed_steps: List[str] = Field(default_factory=list)
    created: Dict[str, int] = Field(default_factory=dict)
    uploaded_files: List[str] = Field(default_factory=list)
    reused_files: List[str] = Field(default_factory=list)
    duration_seconds: float = 0.0
