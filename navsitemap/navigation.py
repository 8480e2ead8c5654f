from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol, Sequence

from pydantic import ValidationError

from .errors import NavigationTreeError
from .models import NavigationNode, NavigationTreeNode

logger = logging.getLogger(__name__)


class NavigationTreeProvider(Protocol):
    async def get_tree(self) -> NavigationTreeNode: ...


class PermissionResolver(Protocol):
    def should_allow_view(self, tree_node: NavigationTreeNode) -> bool: ...


class StaticTreeProvider:
    """Serves a tree that was built elsewhere (tests, embedding apps)."""

    def __init__(self, root: NavigationTreeNode) -> None:
        self._root = root

    async def get_tree(self) -> NavigationTreeNode:
        return self._root


def tree_from_data(data: Any) -> NavigationTreeNode:
    if not isinstance(data, dict):
        raise NavigationTreeError("navigation root must be a JSON object")
    try:
        return NavigationTreeNode.model_validate(data)
    except ValidationError as exc:
        raise NavigationTreeError(f"invalid navigation tree: {exc}") from exc


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


class JsonFileTreeProvider:
    """
    Loads the navigation tree from a JSON file shaped like
    {"value": {...node...}, "children": [...]}.

    The file is read on every call; caching belongs to whoever builds the
    tree, not to the sitemap.
    """

    def __init__(self, path: str) -> None:
        self.path = path

    async def get_tree(self) -> NavigationTreeNode:
        try:
            data = await asyncio.to_thread(_read_json, self.path)
        except FileNotFoundError as exc:
            logger.warning("nav_tree_missing path=%s", self.path)
            raise NavigationTreeError(f"navigation file not found: {self.path}") from exc
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            logger.warning("nav_tree_invalid_json path=%s err=%s", self.path, exc)
            raise NavigationTreeError(f"navigation file is not valid JSON: {self.path}") from exc

        root = tree_from_data(data)
        logger.info("nav_tree_loaded path=%s", self.path)
        return root


def should_render(resolvers: Sequence[PermissionResolver], node: NavigationNode) -> bool:
    # Resolvers judge a node in tree form; every one of them has to allow it.
    tree_node = NavigationTreeNode(value=node)
    for resolver in resolvers:
        if not resolver.should_allow_view(tree_node):
            return False
    return True
