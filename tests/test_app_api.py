"""Integration tests for system-level FastAPI endpoints."""


def test_root_endpoint(client):
    response = client.get("/")
    assert response.status_code == 200

    payload = response.json()
    assert payload["name"] == "learnkit API"
    assert payload["version"] == "1.0.0"
    assert payload["endpoints"]["bandit"] == "/api/bandit"
    assert payload["endpoints"]["optimizer"] == "/api/optimizer"


def test_health_endpoint(client):
    response = client.get("/health")
    assert response.status_code == 200

    payload = response.json()
    assert payload["status"] == "healthy"
    assert isinstance(payload["metrics_enabled"], bool)


def test_metrics_endpoint_exposes_operation_counters(client):
    created = client.post("/api/bandit", json={"param": 0.1, "num_arms": 2})
    assert created.status_code == 201
    client.get(f"/api/bandit/{created.json()['id']}/select")

    response = client.get("/metrics/")
    assert response.status_code == 200
    assert "learnkit_operation_total" in response.text
    assert "learnkit_live_instances" in response.text


def test_openapi_documents_error_payload(client):
    schema = client.get("/openapi.json").json()
    assert "ErrorResponse" in schema["components"]["schemas"]

    observe = schema["paths"]["/api/optimizer/{optimizer_id}/observe"]["post"]["responses"]
    assert {"400", "404", "409"} <= set(observe)
    select = schema["paths"]["/api/bandit/{bandit_id}/select"]["get"]["responses"]
    assert {"400", "404"} <= set(select)
    assert "409" not in select


def test_live_instance_gauge_follows_registry(client, app):
    from prometheus_client import REGISTRY

    ids = [client.post("/api/optimizer", json={"x0": 0.0}).json()["id"] for _ in range(3)]
    client.delete(f"/api/optimizer/{ids[0]}")

    live = REGISTRY.get_sample_value("learnkit_live_instances", {"kind": "optimizer"})
    assert live == len(app.state.optimizer_registry)
