import textwrap
from typing import List

from factcheckai.models.schema import FactCheckResult
from factcheckai.services.text_utils import format_verdict

REPORT_TITLE = "FactCheckAI Report"
REPORT_FILENAME = "FactCheckAI_Report.txt"
PAGE_BREAK = "\f"


class _Pager:
    def __init__(self, page_lines: int):
        self.page_lines = page_lines
        self.pages: List[List[str]] = [[]]

    def add(self, *lines: str):
        for line in lines:
            if len(self.pages[-1]) >= self.page_lines:
                self.pages.append([])
            self.pages[-1].append(line)


def _wrap(text: str, width: int) -> List[str]:
    # wrap line by line so paragraph breaks survive
    lines: List[str] = []
    for line in text.splitlines() or [""]:
        lines.extend(textwrap.wrap(line, width) or [""])
    return lines


def build_report(claim: str, result: FactCheckResult, width: int = 80, page_lines: int = 40) -> List[List[str]]:
    """
    Lay out a downloadable report: title, claim, verdict, explanation and a
    numbered source list. Long text is wrapped to `width`; a page holds at
    most `page_lines` lines.
    """
    pager = _Pager(page_lines)
    pager.add(REPORT_TITLE, "")

    pager.add("Claim:")
    pager.add(*_wrap(claim, width))
    pager.add("")

    pager.add(f"Verdict: {format_verdict(result.verdict)}", "")

    pager.add("Explanation:")
    pager.add(*_wrap(result.explanation, width))

    if result.sources:
        pager.add("", "Sources:")
        for i, source in enumerate(result.sources, start=1):
            pager.add(*textwrap.wrap(f"{i}. {source.snippet}", width))
            if source.url:
                # URLs have no spaces; break_long_words splits them across lines
                pager.add(*textwrap.wrap(source.url, width, initial_indent="   ",
                                         subsequent_indent="   ", break_on_hyphens=False))

    return pager.pages


def render_report(claim: str, result: FactCheckResult, width: int = 80, page_lines: int = 40) -> str:
    pages = build_report(claim, result, width=width, page_lines=page_lines)
    return ("\n" + PAGE_BREAK + "\n").join("\n".join(page) for page in pages) + "\n"
