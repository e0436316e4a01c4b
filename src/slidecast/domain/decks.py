"""Models for deck ingestion results."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class PagePublishResult:
    """Outcome of publishing a single rasterized page."""

    page_number: int
    path: str
    url: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.url is not None


@dataclass(frozen=True)
class DeckIngestResult:
    """Aggregate outcome of a deck ingestion request."""

    session_id: str
    total_pages: int
    pages: list[PagePublishResult] = field(default_factory=list)

    @property
    def image_urls(self) -> list[str]:
        """Public URLs of successfully published pages, in page order."""
        return [page.url for page in self.pages if page.url is not None]

    @property
    def failed_pages(self) -> list[PagePublishResult]:
        return [page for page in self.pages if not page.ok]
