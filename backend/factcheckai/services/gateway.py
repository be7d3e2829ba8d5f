import logging
from typing import List, Optional

from factcheckai.errors import AllProvidersFailedError
from factcheckai.models.schema import FactCheckContext, FactCheckResult
from factcheckai.services.providers import FactCheckProvider

logger = logging.getLogger("gateway")


class ProviderGateway:
    """Tries each provider once, in order; the first non-null result wins."""

    def __init__(self, providers: List[FactCheckProvider]):
        self.providers = list(providers)

    def check(self, content: str, source_url: Optional[str] = None,
              article_title: Optional[str] = None) -> FactCheckResult:
        context = FactCheckContext(source_url=source_url, article_title=article_title)

        for provider in self.providers:
            try:
                result = provider.attempt_fact_check(content, context)
            except Exception as e:
                logger.error("%s fact-check failed: %s", provider.name, e, exc_info=True)
                continue
            if result is None:
                continue

            if article_title:
                result.article_title = article_title
            logger.info("Fact-check answered by %s (verdict=%s)", provider.name, result.verdict)
            return result

        raise AllProvidersFailedError("All fact-check providers failed")
