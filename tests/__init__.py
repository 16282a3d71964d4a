"""
Test utilities package.

IMPORTANT:
Do not globally monkeypatch sys.modules here. FastAPI's TestClient relies on
the real httpx classes. Prefer per-test monkeypatch/fixtures instead.
"""
