"""
View payloads returned for paths of the public URL surface
"""

from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field, ConfigDict


class ViewState(str, Enum):
    """Renderable states of a data-fetching view"""

    LOADING = "loading"
    EMPTY = "empty"
    READY = "ready"
    ERROR = "error"
    NOT_FOUND = "not_found"
    REDIRECT = "redirect"


class ViewResponse(BaseModel):
    route: Optional[str] = None
    state: ViewState
    language: str
    direction: str = "ltr"
    path_without_language: str = Field(..., alias="pathWithoutLanguage")
    is_language_in_path: bool = Field(..., alias="isLanguageInPath")
    # Client replaces its history entry with this when `rewritten` is set
    canonical_path: str = Field(..., alias="canonicalPath")
    rewritten: bool = False
    redirect_to: Optional[str] = Field(None, alias="redirectTo")
    back_link: Optional[str] = Field(None, alias="backLink")
    params: dict[str, str] = Field(default_factory=dict)
    data: Any = None
    message: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
