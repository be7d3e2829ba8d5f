from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class FactCheckRequest(BaseModel):
    claim: Optional[str] = None
    url: Optional[str] = None


class ExtractedArticle(BaseModel):
    title: str
    content: str


class Source(BaseModel):
    url: str = ""
    snippet: str


class FactCheckResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    verdict: str
    explanation: str
    sources: List[Source] = Field(default_factory=list)
    article_title: Optional[str] = Field(default=None, alias="articleTitle")


class ErrorResponse(BaseModel):
    error: str
    status_code: int = Field(default=500, exclude=True)


class ReportRequest(BaseModel):
    claim: str
    result: FactCheckResult


class FactCheckContext(BaseModel):
    source_url: Optional[str] = None
    article_title: Optional[str] = None

    @property
    def is_article(self) -> bool:
        return bool(self.source_url)

    @property
    def subject(self) -> str:
        return "article content" if self.is_article else "claim"

    def describe(self) -> str:
        if self.is_article:
            return f'This is content from an article titled "{self.article_title or ""}" from {self.source_url}. '
        return "This is a claim to fact-check. "
