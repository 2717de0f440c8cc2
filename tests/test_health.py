from __future__ import annotations


def test_health_ok(client) -> None:
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json() == {"status": "ok"}


def test_metrics_exposes_chat_counter(client) -> None:
    client.post("/chat", json={"message": "hello"})

    res = client.get("/metrics")

    assert res.status_code == 200
    assert 'chat_requests_total{outcome="not_configured"}' in res.text
    assert 'route="/chat"' in res.text


def test_run_serves_app_with_port_from_env(monkeypatch) -> None:
    import storefront.main

    calls = []
    monkeypatch.setattr(
        storefront.main.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs))
    )
    monkeypatch.delenv("HOST", raising=False)
    monkeypatch.setenv("PORT", "8123")

    storefront.main.run()

    assert calls == [("storefront.main:app", {"host": "0.0.0.0", "port": 8123, "log_config": None})]
