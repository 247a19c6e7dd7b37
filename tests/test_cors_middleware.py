# tests/test_cors_middleware.py

# conftest 里 CORS_ORIGINS = "http://localhost:3000,https://studio.example.com"

def test_cors_allow_origin_localhost(client):
    origin = "http://localhost:3000"
    response = client.get("/health", headers={"Origin": origin})
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == origin

def test_cors_allow_origin_studio(client):
    origin = "https://studio.example.com"
    response = client.get("/health", headers={"Origin": origin})
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == origin

def test_cors_deny_unknown_origin(client):
    origin = "https://not-allowed.com"
    response = client.get("/health", headers={"Origin": origin})
    # FastAPI CORS middleware will not set allow-origin header for unknown origins
    assert response.status_code == 200
    assert "access-control-allow-origin" not in response.headers

def test_cors_preflight_for_plan_shots(client):
    origin = "http://localhost:3000"
    response = client.options(
        "/api/v1/plan-shots",
        headers={"Origin": origin, "Access-Control-Request-Method": "POST"},
    )
    assert response.status_code == 200
    assert response.headers.get("access-control-allow-origin") == origin
