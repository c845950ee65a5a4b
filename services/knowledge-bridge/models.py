"""Pydantic models for Notion properties and the Kakao knowledge schema."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

CATEGORY_LEVELS = 5
SCHEMA_TYPE = "1.0"


class TextRun(BaseModel):
    plain_text: str = ""


class TextProperty(BaseModel):
    """A Notion ``rich_text`` or ``title`` property."""

    kind: Literal["text"] = "text"
    runs: list[TextRun] = []


class UrlProperty(BaseModel):
    kind: Literal["url"] = "url"
    url: str | None = None


class MissingProperty(BaseModel):
    """Absent key or a property shape we do not read."""

    kind: Literal["missing"] = "missing"


Property = TextProperty | UrlProperty | MissingProperty


class ExtractedFields(BaseModel):
    """Flat intermediate record pulled out of one Notion page."""

    model_config = ConfigDict(frozen=True)

    ordinal: int = Field(ge=1)
    category: list[str] = Field(min_length=CATEGORY_LEVELS, max_length=CATEGORY_LEVELS)
    question: str = ""
    answer: str = ""
    landing_url: str = ""
    landing_button_label: str = ""
    image_url: str = ""


class KnowledgeRow(BaseModel):
    """One admissible FAQ row in the Kakao knowledge upload schema.

    Field order is the wire order of the keyed-object encoding. The array
    encoding (``to_values``) drops the button label.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    faq_no: str = Field(alias="FAQ_No")
    category1: str = Field(default="", alias="Category1")
    category2: str = Field(default="", alias="Category2")
    category3: str = Field(default="", alias="Category3")
    category4: str = Field(default="", alias="Category4")
    category5: str = Field(default="", alias="Category5")
    question: str = Field(alias="Question")
    answer: str = Field(alias="Answer")
    landing_url: str = Field(default="", alias="Landing URL")
    landing_button_label: str = Field(default="", alias="Landing URL Button Name")
    image_url: str = Field(default="", alias="Image Info (URL)")

    @classmethod
    def from_fields(cls, fields: ExtractedFields) -> "KnowledgeRow":
        c1, c2, c3, c4, c5 = fields.category
        return cls(
            faq_no=str(fields.ordinal),
            category1=c1,
            category2=c2,
            category3=c3,
            category4=c4,
            category5=c5,
            question=fields.question,
            answer=fields.answer,
            landing_url=fields.landing_url,
            landing_button_label=fields.landing_button_label,
            image_url=fields.image_url,
        )

    @property
    def categories(self) -> list[str]:
        return [self.category1, self.category2, self.category3, self.category4, self.category5]

    def to_values(self) -> list[str]:
        """[FAQ_No, Category1..5, Question, Answer, Landing URL, Image URL]"""
        return [
            self.faq_no,
            *self.categories,
            self.question,
            self.answer,
            self.landing_url,
            self.image_url,
        ]

    def to_fields(self) -> ExtractedFields:
        return ExtractedFields(
            ordinal=int(self.faq_no),
            category=self.categories,
            question=self.question,
            answer=self.answer,
            landing_url=self.landing_url,
            landing_button_label=self.landing_button_label,
            image_url=self.image_url,
        )


class KnowledgeValuesResponse(BaseModel):
    """Array-of-arrays envelope expected by the Kakao knowledge API."""

    values: list[list[str]] = []
    schema_type: str = SCHEMA_TYPE
