from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field


class SearchRequest(BaseModel):
    term: str = ""


class StatusFilterRequest(BaseModel):
    status: str = "All"


class SortRequest(BaseModel):
    key: str


class PageSizeRequest(BaseModel):
    page_size: int


class PageRequest(BaseModel):
    page: int


class SelectAllRequest(BaseModel):
    scope: Literal["all", "filtered"] = "all"


class ViewStateModel(BaseModel):
    search_term: str = ""
    status_filter: str = "All"
    sort_key: Optional[str] = None
    sort_direction: Literal["ascending", "descending"] = "ascending"
    page_size: int = 10
    current_page: int = Field(default=1, ge=1)


class ThemeRequest(BaseModel):
    theme: Literal["light", "dark"]
