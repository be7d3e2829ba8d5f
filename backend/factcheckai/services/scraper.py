import logging
import re
import time
import requests
from bs4 import BeautifulSoup

from factcheckai.errors import ExtractionError
from factcheckai.models.schema import ExtractedArticle

logger = logging.getLogger("scraper")

BROWSER_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/91.0.4472.124 Safari/537.36"
)

MIN_CONTENT_CHARS = 100
MAX_CONTENT_CHARS = 8000

MAX_PAGE_BYTES = 5 * 1024 * 1024
CHUNK_BYTES = 64 * 1024

# nodes that never carry article text
NOISE_SELECTOR = "script, style, nav, header, footer, aside, .ad, .advertisement, .social-share"

# tried in order; first region with text wins
CONTENT_SELECTORS = [
    "article",
    ".article-content",
    ".post-content",
    ".entry-content",
    ".content",
    "main",
    ".main-content",
    '[role="main"]',
]


class Scraper:
    def __init__(self, timeout: float = 10.0):
        self.timeout = timeout

    def fetch(self, url: str) -> str:
        """
        GET the page within `timeout` seconds overall. requests' own timeout
        only bounds each socket read, so the body is streamed and checked
        against a wall-clock deadline and a size cap.
        """
        deadline = time.monotonic() + self.timeout
        chunks = []
        size = 0
        try:
            with requests.get(url, timeout=self.timeout, stream=True,
                              headers={"User-Agent": BROWSER_USER_AGENT}) as resp:
                resp.raise_for_status()
                for chunk in resp.iter_content(chunk_size=CHUNK_BYTES):
                    size += len(chunk)
                    if size > MAX_PAGE_BYTES:
                        raise ExtractionError(f"Page at {url} exceeds {MAX_PAGE_BYTES} bytes")
                    if time.monotonic() > deadline:
                        raise ExtractionError(f"Timed out fetching {url}")
                    chunks.append(chunk)
                encoding = resp.encoding or "utf-8"
        # urllib3 raises LocationParseError (a ValueError) for some malformed hosts
        except (requests.RequestException, ValueError) as e:
            raise ExtractionError(f"Failed to fetch {url}: {e}") from e
        return b"".join(chunks).decode(encoding, errors="replace")

    def extract(self, url: str) -> ExtractedArticle:
        logger.info("Extracting article content from %s", url)
        soup = BeautifulSoup(self.fetch(url), "html.parser")

        for node in soup.select(NOISE_SELECTOR):
            node.decompose()

        title = self._title(soup)
        content = self._content(soup)

        if len(content) < MIN_CONTENT_CHARS:
            raise ExtractionError("Could not extract sufficient content from the article")

        # Limit content length to avoid provider limits
        if len(content) > MAX_CONTENT_CHARS:
            content = content[:MAX_CONTENT_CHARS] + "..."

        logger.info("Extracted %d chars from %s (title=%r)", len(content), url, title)
        return ExtractedArticle(title=title, content=content)

    @staticmethod
    def _title(soup: BeautifulSoup) -> str:
        if soup.title:
            title = soup.title.get_text().strip()
            if title:
                return title
        h1 = soup.find("h1")
        if h1:
            title = h1.get_text().strip()
            if title:
                return title
        return "Article"

    @staticmethod
    def _content(soup: BeautifulSoup) -> str:
        for selector in CONTENT_SELECTORS:
            elements = soup.select(selector)
            if not elements:
                continue
            text = "".join(el.get_text() for el in elements).strip()
            if text:
                return text

        # fallback: all paragraph text
        text = " ".join(p.get_text() for p in soup.find_all("p")).strip()
        if text:
            return text

        body = soup.body or soup
        return re.sub(r"\s+", " ", body.get_text()).strip()
