# MIT License © 2025 Motohiro Suzuki
import asyncio
import threading

import httpx
import pytest
from fastapi.testclient import TestClient

from acli.process import http_serve
from acli.process.http_serve import HttpServeState, create_app, file_handler, visit_dir


@pytest.fixture
def root(tmp_path):
    (tmp_path / "a.txt").write_text("[package]\nname = 'x'\n")
    (tmp_path / "sub").mkdir()
    (tmp_path / "sub" / "b.txt").write_text("b")
    return tmp_path


@pytest.fixture
def client(root):
    return TestClient(create_app(root))


def test_file(client):
    r = client.get("/a.txt")
    assert r.status_code == 200
    assert r.text.strip().startswith("[package]")


def test_directory_listing(client, root):
    r = client.get("/")
    lines = r.text.splitlines()
    assert r.status_code == 200
    assert lines[0] == str(root.resolve())
    assert any(line.endswith("b.txt") for line in lines)
    assert len(visit_dir(root)) == 3


def test_nested_file(client):
    r = client.get("/sub/b.txt")
    assert r.status_code == 200
    assert r.content == b"b"


def test_missing(client):
    r = client.get("/nope.txt")
    assert r.status_code == 404
    assert "not found" in r.text


def test_percent_encoded_path(client, root):
    (root / "with space.txt").write_text("s")
    r = client.get("/with%20space.txt")
    assert r.status_code == 200
    assert r.text == "s"


def test_tower_static_mount(client):
    r = client.get("/tower/sub/b.txt")
    assert r.status_code == 200
    assert r.content == b"b"
    assert client.get("/tower/nope.txt").status_code == 404


def test_escape_root_is_not_found(root):
    status, body = file_handler(HttpServeState(path=root / "sub"), "../a.txt")
    assert status == 404
    assert b"not found" in body


def test_non_get_is_rejected(client):
    assert client.post("/a.txt").status_code == 405


def test_slow_request_does_not_block_others(root, monkeypatch):
    released = threading.Event()
    original = http_serve.file_handler

    def gated(state, rel):
        if rel == "slow":
            ok = released.wait(timeout=5)
            return 200, b"released" if ok else b"timed out"
        released.set()
        return original(state, rel)

    monkeypatch.setattr(http_serve, "file_handler", gated)
    app = create_app(root)

    async def scenario():
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as c:
            slow = asyncio.ensure_future(c.get("/slow"))
            await asyncio.sleep(0.05)
            fast = await c.get("/a.txt")
            return await slow, fast

    slow, fast = asyncio.run(scenario())
    assert fast.status_code == 200
    assert slow.content == b"released"
