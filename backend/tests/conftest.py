import pytest

from factcheckai.errors import ExtractionError
from factcheckai.models.schema import ExtractedArticle, FactCheckResult, Source


class FakeScraper:
    def __init__(self, article=None, error=None):
        self.article = article
        self.error = error
        self.calls = []

    def extract(self, url):
        self.calls.append(url)
        if self.error:
            raise self.error
        return self.article


class FakeProvider:
    def __init__(self, name, result=None, error=None):
        self.name = name
        self.result = result
        self.error = error
        self.calls = []

    def attempt_fact_check(self, content, context):
        self.calls.append((content, context))
        if self.error:
            raise self.error
        return self.result


class FakeGateway:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def check(self, content, source_url=None, article_title=None):
        self.calls.append({"content": content, "source_url": source_url, "article_title": article_title})
        if self.error:
            raise self.error
        return self.result


@pytest.fixture
def great_wall_result():
    return FactCheckResult(
        verdict="False",
        explanation="The Great Wall is too narrow to be seen from orbit without aid.",
        sources=[Source(url="https://www.nasa.gov/great-wall", snippet="NASA on the Great Wall")],
    )


@pytest.fixture
def article():
    return ExtractedArticle(title="Moon Landing Facts", content="The Apollo 11 mission landed on the Moon in 1969. " * 5)


@pytest.fixture
def failing_scraper():
    return FakeScraper(error=ExtractionError("Could not extract sufficient content from the article"))
