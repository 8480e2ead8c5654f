from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse, Response

from .builder import SitemapNodeBuilder
from .config import NAV_TREE_PATH, SITEMAP_CACHE_SECONDS
from .errors import NavigationTreeError
from .logging_utils import configure_logging
from .navigation import JsonFileTreeProvider
from .sitemap_xml import render_sitemap_xml
from .url_resolver import RequestContext, RequestRouteResolver

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    yield


app = FastAPI(lifespan=lifespan)
app.state.tree_provider = JsonFileTreeProvider(NAV_TREE_PATH)
app.state.permission_resolvers = []


def builder_for_request(request: Request) -> SitemapNodeBuilder:
    state = request.app.state
    return SitemapNodeBuilder(
        tree_provider=state.tree_provider,
        routes=RequestRouteResolver(request),
        request_context=RequestContext.from_request(request),
        permission_resolvers=getattr(state, "permission_resolvers", None) or (),
    )


async def _generate(request: Request):
    try:
        return await builder_for_request(request).generate()
    except NavigationTreeError as exc:
        logger.warning("sitemap_tree_unavailable err=%s", exc)
        raise HTTPException(status_code=503, detail="Navigation tree unavailable")


@app.get("/healthz")
async def healthz():
    return {"ok": True}


@app.get("/sitemap.xml", name="sitemap")
async def sitemap_xml(request: Request):
    entries = await _generate(request)
    headers = {}
    if SITEMAP_CACHE_SECONDS:
        headers["Cache-Control"] = f"public, max-age={SITEMAP_CACHE_SECONDS}"
    return Response(render_sitemap_xml(entries), media_type="application/xml", headers=headers)


@app.get("/api/sitemap")
async def sitemap_json(request: Request):
    entries = await _generate(request)
    return JSONResponse([e.model_dump(mode="json") for e in entries])
