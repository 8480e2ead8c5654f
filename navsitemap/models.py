from __future__ import annotations

from datetime import datetime
from typing import Any, Iterator, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

ChangeFrequency = Literal["always", "hourly", "daily", "weekly", "monthly", "yearly", "never"]


# -------------------------
# Navigation input
# -------------------------
class SitemapMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    change_frequency: Optional[ChangeFrequency] = None
    last_modified: Optional[datetime] = None
    priority: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("change_frequency", mode="before")
    @classmethod
    def _lowercase_change_frequency(cls, v: Any) -> Any:
        # Navigation files may carry enum names such as "Daily".
        if isinstance(v, str):
            return v.strip().lower()
        return v


class NavigationNode(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)
    key: str = ""
    text: str = ""
    url: str = ""
    action: str = ""
    controller: str = ""
    area: str = ""
    named_route: str = ""
    hide_from_anonymous: bool = False
    exclude_from_search_site_map: bool = False
    # Only set for nodes that carry extended sitemap attributes.
    sitemap: Optional[SitemapMetadata] = None


class NavigationTreeNode(BaseModel):
    model_config = ConfigDict(frozen=True)
    value: NavigationNode
    children: List[NavigationTreeNode] = Field(default_factory=list)

    def flatten(self) -> Iterator[NavigationNode]:
        """
        Yields every node depth-first, parent before children, keeping
        sibling order. Each call starts a fresh traversal.
        """
        stack: List[NavigationTreeNode] = [self]
        while stack:
            current = stack.pop()
            yield current.value
            stack.extend(reversed(current.children))


# -------------------------
# Sitemap output
# -------------------------
class SitemapEntry(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")
    url: str
    change_frequency: Optional[ChangeFrequency] = None
    last_modified: Optional[datetime] = None
    priority: Optional[float] = Field(default=None, ge=0.0, le=1.0)

    @field_validator("url")
    @classmethod
    def _url_must_be_absolute(cls, v: str) -> str:
        if not v or not v.startswith("http"):
            raise ValueError("sitemap url must be absolute")
        return v

    @classmethod
    def from_node(cls, url: str, node: NavigationNode) -> SitemapEntry:
        meta = node.sitemap
        if meta is None:
            return cls(url=url)
        return cls(
            url=url,
            change_frequency=meta.change_frequency,
            last_modified=meta.last_modified,
            priority=meta.priority,
        )
