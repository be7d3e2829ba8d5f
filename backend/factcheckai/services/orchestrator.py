# backend/factcheckai/services/orchestrator.py
"""
Request orchestration: validate -> (scrape) -> gateway -> result.

handle() returns either the FactCheckResult or an ErrorResponse carrying
the HTTP status. Clients only ever see the short message; the full error
goes to the log.
"""

import logging
from typing import Optional, Union

from factcheckai.errors import (
    AllProvidersFailedError,
    ExtractionError,
    FactCheckError,
    ValidationError,
)
from factcheckai.models.schema import ErrorResponse, FactCheckRequest, FactCheckResult
from factcheckai.services.gateway import ProviderGateway
from factcheckai.services.scraper import Scraper
from factcheckai.services.text_utils import is_valid_url, validate_claim

logger = logging.getLogger("orchestrator")


class FactCheckService:
    def __init__(self, scraper: Scraper, gateway: ProviderGateway):
        self.scraper = scraper
        self.gateway = gateway

    def handle(self, request: FactCheckRequest) -> Union[FactCheckResult, ErrorResponse]:
        try:
            return self._run(request)
        except FactCheckError as e:
            logger.warning("Fact-check rejected (%d): %s", e.status_code, e)
            return ErrorResponse(error=e.message, status_code=e.status_code)
        except Exception:
            logger.exception("Unexpected error while handling fact-check request")
            return ErrorResponse(error="Internal server error", status_code=500)

    def _run(self, request: FactCheckRequest) -> FactCheckResult:
        claim, url = request.claim, request.url
        if not claim and not url:
            raise ValidationError("Either claim or URL must be provided")

        content: Optional[str] = claim
        article_title: Optional[str] = None

        # URL content takes precedence over a claim sent alongside it
        if url:
            if not is_valid_url(url):
                raise ValidationError("Invalid URL")
            try:
                article = self.scraper.extract(url)
            except ExtractionError as e:
                logger.error("Failed to extract article content from %s: %s", url, e)
                raise ExtractionError("Failed to extract article content from the provided URL") from e
            content = article.content
            article_title = article.title
        elif not isinstance(claim, str) or not validate_claim(claim):
            raise ValidationError("No valid content to fact-check")

        if not content or not isinstance(content, str):
            raise ValidationError("No valid content to fact-check")

        try:
            return self.gateway.check(content, source_url=url or None, article_title=article_title)
        except AllProvidersFailedError:
            logger.error("Both providers failed for %s", url or "claim")
            raise
