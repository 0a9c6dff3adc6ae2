"""Page cache service - Rendered portal pages.

Pages are keyed by page id and request parameters. The service only
stores what callers render; on a miss the caller's render function
produces the page, which is then cached.
"""

from __future__ import annotations

from typing import Callable, Mapping, Optional

from .cacheable_service import AbstractCacheableService


class PageCacheService(AbstractCacheableService[str, str]):
    """Cache of rendered pages, typed ``str -> str``."""

    SERVICE_NAME = "PageCacheService"

    def __post_init__(self) -> None:
        super().__post_init__()
        self.init_cache(key_type=str, value_type=str)

    @property
    def name(self) -> str:
        return self.SERVICE_NAME

    @staticmethod
    def build_key(page_id: int, params: Optional[Mapping[str, str]] = None) -> str:
        """Build the cache key of a page.

        Parameters are sorted so the key does not depend on their order.

        Example:
            >>> PageCacheService.build_key(3, {"lang": "fr", "a": "1"})
            '[page_id:3][a:1][lang:fr]'
        """
        parts = [f"[page_id:{page_id}]"]
        for name in sorted(params or {}):
            parts.append(f"[{name}:{params[name]}]")  # type: ignore[index]
        return "".join(parts)

    def get_page(
        self,
        page_id: int,
        params: Optional[Mapping[str, str]],
        render: Callable[[], str],
    ) -> str:
        """Return a cached page, rendering and caching it on a miss.

        Args:
            page_id: Identifier of the page.
            params: Request parameters that change the rendering.
            render: Produces the page when it is not cached.

        Returns:
            The page content.
        """
        key = self.build_key(page_id, params)
        page = self.get(key)
        if page is not None:
            self._logger.debug("Page cache hit", extra={"key": key})
            return page

        page = render()
        self.put(key, page)
        return page
