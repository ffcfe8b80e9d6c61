import pytest
from fastapi.testclient import TestClient

from msg_guard.app import create_app
from msg_guard.moderation.store import Mode, ModerationConfig, Stats


@pytest.fixture
def client(store, tmp_path):
    app = create_app(store, static_dir=str(tmp_path / "no-static"))
    return TestClient(app, raise_server_exceptions=False)


def test_data_snapshot(store, client):
    store.save(ModerationConfig(
        keywords=["spam"],
        whitelist=["admin-*"],
        stats=Stats(total_checks=3, blocked=2),
    ))

    r = client.get("/api/data")

    assert r.status_code == 200
    assert r.json() == {
        "keywords": ["spam"],
        "whitelist": ["admin-*"],
        "stats": {"totalChecks": 3, "blocked": 2},
        "enabled": True,
        "mode": "both",
    }


def test_data_on_fresh_install(client):
    body = client.get("/api/data").json()
    assert body["keywords"] == []
    assert body["stats"] == {"totalChecks": 0, "blocked": 0}


def test_scenario_e_dry_run(store, client):
    store.save(ModerationConfig(keywords=["spam"], enabled=False))

    r = client.post("/api/test", json={"text": "buy spam now"})

    assert r.status_code == 200
    assert r.json() == {"passed": False, "matched": "spam"}
    assert store.load().stats == Stats()


def test_dry_run_pass(store, client):
    store.save(ModerationConfig(keywords=["spam"]))
    assert client.post("/api/test", json={"text": "hello"}).json() == {"passed": True, "matched": None}


def test_add_and_remove_keyword(client):
    r = client.post("/api/keywords", json={"word": "spam"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "keywords": ["spam"]}

    # retry does not duplicate
    assert client.post("/api/keywords", json={"word": "spam"}).json()["keywords"] == ["spam"]

    r = client.request("DELETE", "/api/keywords", json={"word": "spam"})
    assert r.status_code == 200
    assert r.json() == {"success": True, "keywords": []}

    assert client.get("/api/keywords").json() == {"keywords": []}


def test_replace_keywords_preserves_order_and_duplicates(client):
    words = ["b", "a", "b", "Ç"]
    r = client.put("/api/keywords", json={"keywords": words})
    assert r.status_code == 200
    assert client.get("/api/data").json()["keywords"] == words


def test_whitelist_routes(client):
    assert client.post("/api/whitelist", json={"pattern": "admin-*"}).json() == {
        "success": True, "whitelist": ["admin-*"]
    }
    client.put("/api/whitelist", json={"whitelist": ["ops-*", "qa-*"]})
    r = client.request("DELETE", "/api/whitelist", json={"pattern": "ops-*"})
    assert r.json()["whitelist"] == ["qa-*"]
    assert client.get("/api/whitelist").json() == {"whitelist": ["qa-*"]}


def test_enabled_and_mode(store, client):
    assert client.put("/api/enabled", json={"enabled": False}).json() == {"success": True, "enabled": False}
    assert client.put("/api/mode", json={"mode": "output_only"}).json() == {"success": True, "mode": "output_only"}

    config = store.load()
    assert config.enabled is False
    assert config.mode == Mode.OUTPUT_ONLY


@pytest.mark.parametrize("method,path,body", [
    ("POST", "/api/keywords", {}),
    ("POST", "/api/keywords", {"word": ""}),
    ("PUT", "/api/keywords", {"keywords": "spam"}),
    ("PUT", "/api/mode", {"mode": "sideways"}),
    ("PUT", "/api/enabled", {}),
    ("POST", "/api/test", {}),
])
def test_malformed_requests(store, client, config_path, method, path, body):
    store.save(ModerationConfig(keywords=["keep"]))
    before = config_path.read_bytes()

    r = client.request(method, path, json=body)

    assert r.status_code == 400
    assert r.json() == {"error": "Invalid request"}
    assert config_path.read_bytes() == before


def test_invalid_json_body(client):
    r = client.post("/api/keywords", content=b"{not json", headers={"Content-Type": "application/json"})
    assert r.status_code == 400


@pytest.mark.parametrize("method,path", [
    ("GET", "/api/nope"),
    ("POST", "/api/data/extra"),
    ("PATCH", "/api/keywords"),
    ("GET", "/api/"),
    ("OPTIONS", "/api/nope"),
    ("OPTIONS", "/api/keywords"),
])
def test_unknown_routes(client, config_path, method, path):
    r = client.request(method, path)
    assert r.status_code == 404
    assert r.json() == {"error": "Not Found"}
    assert not config_path.exists()


def test_save_failure_is_client_visible(store, client, monkeypatch):
    monkeypatch.setattr(store, "save", lambda config: False)
    r = client.post("/api/keywords", json={"word": "spam"})
    assert r.status_code == 400
    assert r.json() == {"error": "Failed to add keyword"}


def test_internal_error_becomes_500(store, client, monkeypatch):
    def explode():
        raise RuntimeError("boom")

    monkeypatch.setattr(store, "load", explode)

    r = client.get("/api/data")
    assert r.status_code == 500
    assert r.json() == {"error": "Internal Error"}

    # listener still serves
    monkeypatch.undo()
    assert client.get("/api/data").status_code == 200


def test_static_admin_page(store, tmp_path):
    static = tmp_path / "public"
    static.mkdir()
    (static / "index.html").write_text("<h1>admin</h1>")
    client = TestClient(create_app(store, static_dir=str(static)))

    r = client.get("/")
    assert r.status_code == 200
    assert "admin" in r.text
    assert client.get("/api/data").status_code == 200


def test_unknown_head_request(client):
    r = client.head("/api/nope")
    assert r.status_code == 404


def test_empty_keyword_from_replace_blocks_everything(store, client):
    client.put("/api/keywords", json={"keywords": [""]})
    assert client.post("/api/test", json={"text": "hello"}).json() == {"passed": False, "matched": ""}


def test_file_backed_handlers_run_in_threadpool():
    import asyncio

    from fastapi.routing import APIRoute

    from msg_guard.admin.router import router

    for route in router.routes:
        if isinstance(route, APIRoute):
            assert not asyncio.iscoroutinefunction(route.endpoint), route.path
