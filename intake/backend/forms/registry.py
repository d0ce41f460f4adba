"""
Page Registry.

In-memory store of mounted pages, keyed by page id. Nothing is persisted;
a restart clears every page. The store is bounded and evicts the oldest
page first once full.
"""

from collections import OrderedDict
from typing import TypeVar

from intake.backend.core.config import get_app_config
from intake.backend.core.exceptions import NotFoundError
from intake.backend.core.logging import get_logger, log_with_source
from intake.backend.forms.pages import IntakePage

logger = get_logger(__name__)

PageT = TypeVar("PageT", bound=IntakePage)


class PageRegistry:
    """Bounded id → page mapping."""

    def __init__(self, max_pages: int) -> None:
        self.max_pages = max_pages
        self._pages: OrderedDict[str, IntakePage] = OrderedDict()

    def __len__(self) -> int:
        return len(self._pages)

    def add(self, page: PageT) -> PageT:
        """Register a newly mounted page, evicting the oldest when full."""
        while len(self._pages) >= self.max_pages:
            evicted_id, evicted = self._pages.popitem(last=False)
            log_with_source(
                logger,
                "forms",
                "debug",
                "Page evicted",
                page=evicted.kind,
                page_id=evicted_id,
            )
        self._pages[page.id] = page
        return page

    def get(self, page_id: str, page_type: type[PageT]) -> PageT:
        """
        Look up a page of the given type.

        Raises:
            NotFoundError: If no page of that type has this id
        """
        page = self._pages.get(page_id)
        if not isinstance(page, page_type):
            raise NotFoundError(f"Page {page_id} not found")
        return page

    def clear(self) -> None:
        self._pages.clear()


_registry: PageRegistry | None = None


def get_page_registry() -> PageRegistry:
    """Get or create the page registry singleton."""
    global _registry
    if _registry is None:
        _registry = PageRegistry(get_app_config().forms.sessions.max_pages)
    return _registry
