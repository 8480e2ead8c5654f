from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol

from fastapi import Request
from starlette.routing import NoMatchFound

from .models import NavigationNode


class RouteResolver(Protocol):
    def action_url(self, action: str, controller: str, area: str) -> Optional[str]: ...

    def route_url(self, name: str) -> Optional[str]: ...


def is_absolute(url: Optional[str]) -> bool:
    # Only "http..." counts; scheme-relative "//host/path" is treated as relative.
    return bool(url) and url.startswith("http")


def action_route_name(action: str, controller: str, area: str = "") -> str:
    parts = [p for p in (area, controller, action) if p]
    return ".".join(parts)


class RequestRouteResolver:
    """Resolves node routes against the FastAPI app that is serving `request`."""

    def __init__(self, request: Request) -> None:
        self._request = request

    def action_url(self, action: str, controller: str, area: str) -> Optional[str]:
        return self._path_for(action_route_name(action, controller, area))

    def route_url(self, name: str) -> Optional[str]:
        return self._path_for(name)

    def _path_for(self, name: str) -> Optional[str]:
        try:
            path = self._request.app.url_path_for(name)
        except NoMatchFound:
            return None
        root_path = (self._request.scope.get("root_path") or "").rstrip("/")
        return f"{root_path}{path}"


@dataclass(frozen=True)
class RequestContext:
    scheme: str
    host: str

    @classmethod
    def from_request(cls, request: Request) -> RequestContext:
        return cls(scheme=request.url.scheme, host=request.url.netloc)

    def base_url(self) -> str:
        return f"{self.scheme}://{self.host}"


def resolve_node_url(node: NavigationNode, routes: RouteResolver, base_url: str) -> str:
    """
    Returns the absolute url for a navigation node, or "" when the node is
    hidden from anonymous visitors or nothing resolves.

    Resolution order: an already absolute node.url, then action/controller/area,
    then the named route, then the raw node.url. A relative result is
    prefixed with base_url.
    """
    if node.hide_from_anonymous:
        return ""

    if is_absolute(node.url):
        return node.url

    url_to_use: Optional[str] = None
    if node.action and node.controller:
        url_to_use = routes.action_url(node.action, node.controller, node.area or "")
    elif node.named_route:
        url_to_use = routes.route_url(node.named_route)

    if not url_to_use:
        url_to_use = node.url

    if is_absolute(url_to_use):
        return url_to_use
    if not url_to_use:
        return ""

    return base_url + url_to_use
