import pytest
from fastapi.testclient import TestClient

from navsitemap.main import app
from navsitemap.models import NavigationNode, NavigationTreeNode
from navsitemap.navigation import JsonFileTreeProvider, StaticTreeProvider


def _site_tree():
    return NavigationTreeNode(
        value=NavigationNode(key="home", url="/"),
        children=[
            NavigationTreeNode(value=NavigationNode(key="health", named_route="healthz")),
            NavigationTreeNode(
                value=NavigationNode.model_validate(
                    {"key": "about", "url": "/about", "sitemap": {"priority": 0.8, "changeFrequency": "monthly"}}
                )
            ),
            NavigationTreeNode(value=NavigationNode(key="admin", url="/admin")),
            NavigationTreeNode(value=NavigationNode(key="dup", url="http://testserver/about")),
        ],
    )


class DenyAdmin:
    def should_allow_view(self, tree_node):
        return tree_node.value.key != "admin"


@pytest.fixture()
def client(monkeypatch):
    monkeypatch.setattr(app.state, "tree_provider", StaticTreeProvider(_site_tree()))
    monkeypatch.setattr(app.state, "permission_resolvers", [DenyAdmin()])
    return TestClient(app)


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_sitemap_json(client):
    resp = client.get("/api/sitemap")
    assert resp.status_code == 200
    body = resp.json()
    assert [item["url"] for item in body] == [
        "http://testserver/",
        "http://testserver/healthz",
        "http://testserver/about",
    ]
    assert body[2]["priority"] == 0.8
    assert body[2]["change_frequency"] == "monthly"
    assert body[0]["priority"] is None


def test_sitemap_xml(client):
    resp = client.get("/sitemap.xml")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    assert "<loc>http://testserver/about</loc>" in resp.text
    assert "<priority>0.8</priority>" in resp.text
    assert "<changefreq>monthly</changefreq>" in resp.text
    assert "/admin" not in resp.text
    assert resp.text.count("<loc>http://testserver/about</loc>") == 1


def test_sitemap_sets_cache_header(client, monkeypatch):
    monkeypatch.setattr("navsitemap.main.SITEMAP_CACHE_SECONDS", 60)
    resp = client.get("/sitemap.xml")
    assert resp.headers["cache-control"] == "public, max-age=60"


def test_sitemap_without_cache_header(client, monkeypatch):
    monkeypatch.setattr("navsitemap.main.SITEMAP_CACHE_SECONDS", 0)
    resp = client.get("/sitemap.xml")
    assert "cache-control" not in resp.headers


def test_missing_navigation_file_returns_503(client, monkeypatch, tmp_path):
    monkeypatch.setattr(app.state, "tree_provider", JsonFileTreeProvider(str(tmp_path / "missing.json")))
    resp = client.get("/sitemap.xml")
    assert resp.status_code == 503


def test_invalid_utf8_navigation_file_returns_503(client, monkeypatch, tmp_path):
    path = tmp_path / "navigation.json"
    path.write_bytes(b'{"value": {"key": "\xff"}}')
    monkeypatch.setattr(app.state, "tree_provider", JsonFileTreeProvider(str(path)))
    resp = client.get("/sitemap.xml")
    assert resp.status_code == 503


def test_logging_is_configured_on_startup(monkeypatch):
    calls = []
    monkeypatch.setattr("navsitemap.main.configure_logging", lambda: calls.append(True))
    monkeypatch.setattr(app.state, "tree_provider", StaticTreeProvider(_site_tree()))

    with TestClient(app) as started:
        assert calls == [True]
        assert started.get("/healthz").status_code == 200
