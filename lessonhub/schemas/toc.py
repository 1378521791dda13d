from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class TOCItem(BaseModel):
    id: str
    title: str
    level: int = Field(..., ge=2, le=6)
    children: Optional[List["TOCItem"]] = None


class TOCResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    toc_items: List[TOCItem] = Field(..., alias="tocItems")
    source: str  # "markdown", "default", or "error"
    week: int
    section: str
