from datetime import datetime
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from typing import Literal, Optional, List

Style = Literal["heartfelt", "playful", "elegant", "humorous"]

STYLES: tuple[str, ...] = ("heartfelt", "playful", "elegant", "humorous")


class PoemRequest(BaseModel):
    occasion: str = Field(
        min_length=1,
        validation_alias=AliasChoices("occasion", "eventType"),
    )
    names: Optional[str] = None  # comma-separated, first entry is the primary name
    style: Style
    childrenTheme: Optional[str] = None
    childrenOptions: Optional[List[str]] = None
    learningTopic: Optional[str] = None

    @field_validator("occasion")
    @classmethod
    def _occasion_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Occasion is required")
        return v


class NewPoem(BaseModel):
    """Everything a store needs to create a record; id and timestamp are the store's job."""

    occasion: str
    names: Optional[str] = None
    style: Style
    content: str
    childrenTheme: Optional[str] = None
    childrenOptions: Optional[List[str]] = None
    learningTopic: Optional[str] = None
    status: Literal["ok", "fallback"] = "ok"
    failureReason: Optional[str] = None


class PoemRecord(NewPoem):
    model_config = ConfigDict(frozen=True)

    id: int
    createdAt: datetime


class ChildrenTheme(BaseModel):
    value: str
    label: str
    multiselect: bool
    options: List[str]


class Option(BaseModel):
    value: str
    label: str


class PoemOptions(BaseModel):
    occasions: List[Option]
    styles: List[Option]
    childrenThemes: List[ChildrenTheme]
    learningTopics: List[Option]
