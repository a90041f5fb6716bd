from typing import Optional, List, Dict
from pydantic import BaseModel, Field

from app.schemas.post import PostFeed


class PageSection(BaseModel):
    heading: str
    body: Optional[str] = None
    items: List[str] = Field(default_factory=list)


class StaticPage(BaseModel):
    title: str
    intro: str
    sections: List[PageSection] = Field(default_factory=list)
    links: Dict[str, str] = Field(default_factory=dict)


class HomePage(BaseModel):
    title: str
    intro: str
    feed: PostFeed
