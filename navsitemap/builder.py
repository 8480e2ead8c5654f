from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Set

from .errors import OperationCanceled
from .logging_utils import LoggerWarningSink, WarningSink
from .models import NavigationTreeNode, SitemapEntry
from .navigation import NavigationTreeProvider, PermissionResolver, should_render
from .url_resolver import RequestContext, RouteResolver, is_absolute, resolve_node_url

logger = logging.getLogger(__name__)


@dataclass
class GenerationRun:
    """Working state for one generate() call. Never shared between calls."""

    base_url: str
    seen_urls: Set[str] = field(default_factory=set)
    entries: List[SitemapEntry] = field(default_factory=list)

    def add(self, entry: SitemapEntry) -> None:
        self.entries.append(entry)
        self.seen_urls.add(entry.url)


class SitemapNodeBuilder:
    """
    Turns the navigation tree into sitemap entries.

    Nodes excluded from the search sitemap or denied by any permission
    resolver are dropped, the rest are resolved to absolute urls and
    deduplicated in traversal order.
    """

    def __init__(
        self,
        tree_provider: NavigationTreeProvider,
        routes: RouteResolver,
        request_context: RequestContext,
        permission_resolvers: Sequence[PermissionResolver] = (),
        warnings: Optional[WarningSink] = None,
    ) -> None:
        self.tree_provider = tree_provider
        self.routes = routes
        self.request_context = request_context
        self.permission_resolvers = tuple(permission_resolvers)
        self.warnings = warnings or LoggerWarningSink()

    async def generate(self, cancel_event: Optional[asyncio.Event] = None) -> List[SitemapEntry]:
        root = await self._fetch_tree(cancel_event)
        run = GenerationRun(base_url=self.request_context.base_url())

        for node in root.flatten():
            if node.exclude_from_search_site_map:
                continue
            if not should_render(self.permission_resolvers, node):
                continue

            url = resolve_node_url(node, self.routes, run.base_url)
            if not url:
                self.warnings.warning(f"failed to resolve url for node {node.key}, skipping this node for sitemap")
                continue
            if not is_absolute(url):
                self.warnings.warning(f"skipping relative url {url}, sitemap urls must be absolute")
                continue

            if url in run.seen_urls:
                continue
            run.add(SitemapEntry.from_node(url, node))

        logger.info("sitemap_generated entries=%s base_url=%s", len(run.entries), run.base_url)
        return run.entries

    async def _fetch_tree(self, cancel_event: Optional[asyncio.Event]) -> NavigationTreeNode:
        if cancel_event is None:
            return await self.tree_provider.get_tree()
        if cancel_event.is_set():
            raise OperationCanceled("sitemap generation canceled before loading navigation tree")

        fetch = asyncio.ensure_future(self.tree_provider.get_tree())
        canceled = asyncio.ensure_future(cancel_event.wait())
        try:
            done, _ = await asyncio.wait({fetch, canceled}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            canceled.cancel()
            if not fetch.done():
                fetch.cancel()

        if fetch not in done:
            raise OperationCanceled("sitemap generation canceled while loading navigation tree")
        return fetch.result()
