"""
Test the makeup HTTP endpoints with FastAPI's TestClient.
"""

import base64

from fastapi.testclient import TestClient

from glam_agents.interpretation.prompt_interpreter import PromptInterpreter
from glam_agents.persistence.look_cache import LookCache
from glam_api.makeup_server import app


def offline_client():
    """TestClient whose interpreter never reaches a real model."""
    client = TestClient(app)
    client.__enter__()
    app.state.interpreter = PromptInterpreter(None, cache=LookCache())
    return client


def test_health():
    client = offline_client()
    try:
        response = client.get("/api/makeup/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["catalog_categories"] >= 1
    finally:
        client.__exit__(None, None, None)


def test_presets():
    client = offline_client()
    try:
        all_presets = client.get("/api/makeup/presets").json()["presets"]
        glamorous = client.get("/api/makeup/presets", params={"category": "glamorous"}).json()["presets"]
        assert len(all_presets) == 6
        assert [p["name"] for p in glamorous] == ["Night Out", "Red Carpet"]
    finally:
        client.__exit__(None, None, None)


def test_create_look():
    print("\n=== TESTING POST /api/makeup/looks ===\n")

    client = offline_client()
    try:
        response = client.post("/api/makeup/looks", json={"prompt": "wedding makeup", "top_k": 1})
        assert response.status_code == 200
        body = response.json()

        print(f"  Style: {body['look']['style']}, source: {body['look']['source']}")
        assert body["look"]["style"] == "Bridal"
        assert body["look"]["source"] == "fallback"
        assert [f["type"] for f in body["look"]["filters"]] == ["lipstick", "eyeshadow", "eyeliner", "blush"]
        assert len(body["recommendations"]["lipstick"]) == 1
        assert "similarity" in body["recommendations"]["lipstick"][0]

        again = client.post("/api/makeup/looks", json={"prompt": "Wedding makeup"}).json()
        assert again["look"]["source"] == "cache"
    finally:
        client.__exit__(None, None, None)


def test_create_look_with_image_and_validation():
    client = offline_client()
    try:
        image = "data:image/png;base64," + base64.b64encode(b"\x89PNG\r\n\x1a\nframe").decode("ascii")
        ok = client.post("/api/makeup/looks", json={"prompt": "office", "image": image})
        assert ok.status_code == 200
        assert ok.json()["look"]["style"] == "Professional"

        bad_image = client.post("/api/makeup/looks", json={"prompt": "office", "image": "%%%"})
        assert bad_image.status_code == 400

        empty = client.post("/api/makeup/looks", json={"prompt": ""})
        assert empty.status_code == 422

        blank = client.post("/api/makeup/looks", json={"prompt": "   "})
        assert blank.status_code == 422
    finally:
        client.__exit__(None, None, None)


def main():
    test_health()
    test_presets()
    test_create_look()
    test_create_look_with_image_and_validation()
    print("\n✅ All makeup server tests passed")


if __name__ == "__main__":
    main()
