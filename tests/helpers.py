"""Test doubles shared across test modules."""

from __future__ import annotations

from linkclipper.models import FetchResult


def page(title: str, description: str = "", body: str = "Some body text.") -> FetchResult:
    html = (
        "<html><head>"
        f"<title>{title}</title>"
        f'<meta name="description" content="{description}">'
        "</head><body>"
        f"<p>{body}</p>"
        "</body></html>"
    )
    return FetchResult(status=200, html=html)


class FakeFetcher:
    """Serves canned pages and records every requested URL."""

    def __init__(self, pages: dict[str, FetchResult] | None = None, failing=()):
        self.pages = pages or {}
        self.failing = set(failing)
        self.calls: list[str] = []

    async def __call__(self, url: str) -> FetchResult:
        self.calls.append(url)
        if url in self.failing:
            raise RuntimeError(f"boom: {url}")
        return self.pages.get(url, page(f"Page {len(self.calls)}"))
