"""HTTP-level tests: status codes, camelCase bodies, admin guard."""

import httpx
import openai
import pytest
from fastapi.testclient import TestClient
from jose import jwt

from candidate_matcher.main import create_app

from conftest import FakeChatModel

VACANCY = "Data engineer with Python, Spark, Airflow and Snowflake"


def _token(settings, role: str = "admin", sub: str = "admin-1") -> str:
    return jwt.encode({"sub": sub, "role": role}, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _client(settings, llm=None, **kwargs) -> TestClient:
    return TestClient(create_app(settings, llm=llm or FakeChatModel()), **kwargs)


@pytest.fixture
def client(settings, cv_dir):
    (cv_dir / "Anna.txt").write_text("Python developer", encoding="utf-8")
    (cv_dir / "Boris.txt").write_text("Python, Spark, Airflow, Snowflake data engineer", encoding="utf-8")
    return _client(settings)


class TestMatchEndpoint:
    def test_returns_ranked_candidates(self, client):
        resp = client.post("/api/candidate-matcher/match", json={"vacancyDescription": VACANCY})
        assert resp.status_code == 200
        body = resp.json()
        assert [c["name"] for c in body] == ["Boris", "Anna"]
        assert body[0] == {
            "name": "Boris",
            "filename": "Boris.txt",
            "summary": "Strong match for the vacancy.",
            "rating": 8,
            "minRating": 1,
            "maxRating": 10,
        }

    def test_short_description_is_400(self, client):
        resp = client.post("/api/candidate-matcher/match", json={"vacancyDescription": "short"})
        assert resp.status_code == 400
        assert resp.json()["error"] == "Bad Request"
        assert resp.json()["message"].startswith("Validation failed")

    def test_blank_description_is_400(self, client):
        resp = client.post("/api/candidate-matcher/match", json={"vacancyDescription": " " * 20})
        assert resp.status_code == 400

    def test_missing_body_field_is_400(self, client):
        resp = client.post("/api/candidate-matcher/match", json={})
        assert resp.status_code == 400

    @pytest.mark.parametrize(
        "error_cls, provider_status, expected",
        [
            (openai.RateLimitError, 429, 429),
            (openai.AuthenticationError, 401, 401),
            (openai.PermissionDeniedError, 403, 403),
            (openai.NotFoundError, 404, 404),
            (openai.InternalServerError, 500, 502),
            (openai.BadRequestError, 400, 502),
        ],
    )
    def test_provider_errors_map_to_status(self, settings, cv_dir, error_cls, provider_status, expected):
        (cv_dir / "Anna.txt").write_text("Python developer", encoding="utf-8")
        error = error_cls(
            "provider said no",
            response=httpx.Response(provider_status, request=httpx.Request("POST", "https://api.openai.com")),
            body=None,
        )
        client = _client(settings, llm=FakeChatModel(error=error))
        resp = client.post("/api/candidate-matcher/match", json={"vacancyDescription": VACANCY})
        assert resp.status_code == expected
        assert resp.json()["status"] == expected

    def test_unreadable_cv_is_400(self, settings, cv_dir):
        (cv_dir / "broken.txt").write_bytes(b"\xff\xfe\xfa")
        resp = _client(settings).post("/api/candidate-matcher/match", json={"vacancyDescription": VACANCY})
        assert resp.status_code == 400
        assert "broken.txt" in resp.json()["message"]

    def test_unexpected_error_is_500(self, settings, cv_dir):
        app = create_app(settings, llm=FakeChatModel())

        class Exploding:
            async def match(self, vacancy):
                raise RuntimeError("kaboom")

        app.state.matching_service = Exploding()
        resp = TestClient(app, raise_server_exceptions=False).post(
            "/api/candidate-matcher/match", json={"vacancyDescription": VACANCY}
        )
        assert resp.status_code == 500
        assert "kaboom" not in resp.json()["message"]


class TestRatingAndCost:
    def test_rating_config(self, client):
        assert client.get("/api/rating/config").json() == {
            "minRating": 1,
            "maxRating": 10,
            "rangeDescription": "1 to 10",
        }

    def test_pricing(self, client):
        assert client.get("/api/cost/pricing").json() == {
            "inputTokensPerMillion": 2.5,
            "outputTokensPerMillion": 10.0,
            "currency": "USD",
        }

    def test_metrics_before_any_call(self, client):
        body = client.get("/api/cost/metrics").json()
        assert body["totalCost"] == 0
        assert body["totalInputTokens"] == 0
        assert body["latestAiCall"] is None

    def test_metrics_after_match(self, client):
        client.post("/api/candidate-matcher/match", json={"vacancyDescription": VACANCY})
        body = client.get("/api/cost/metrics").json()
        # 2 candidates x 2 calls x (100 in, 20 out)
        assert body["totalInputTokens"] == 400
        assert body["totalOutputTokens"] == 80
        # each call is rounded on its own: 0.0003 input + 0.0002 output
        assert body["totalCost"] == pytest.approx(4 * 0.0005)
        assert body["latestAiCall"]["inputTokens"] == 100
        assert body["pricing"]["currency"] == "USD"

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}


class TestAdminPrompts:
    def test_list_prompts(self, client):
        body = client.get("/api/admin/prompts").json()
        assert [(p["type"], p["role"]) for p in body] == [
            ("SUMMARY", "system"),
            ("SUMMARY", "user"),
            ("RATING", "system"),
            ("RATING", "user"),
        ]
        assert {"content", "filePath", "cached", "edited"} <= set(body[0])

    def test_get_single_prompt_case_insensitive(self, client):
        resp = client.get("/api/admin/prompts/summary/system")
        assert resp.status_code == 200
        assert resp.json()["type"] == "SUMMARY"

    def test_unknown_type_is_400(self, client):
        resp = client.get("/api/admin/prompts/feedback/system")
        assert resp.status_code == 400
        assert "Invalid prompt type" in resp.json()["message"]

    def test_update_then_reset(self, client):
        original = client.get("/api/admin/prompts/rating/user").json()["content"]

        resp = client.put("/api/admin/prompts", json={"type": "rating", "role": "user", "content": "Number only"})
        assert resp.status_code == 200
        assert resp.json()["content"] == "Number only"
        assert resp.json()["edited"] is True
        assert client.get("/api/admin/prompts/RATING/user").json()["content"] == "Number only"

        resp = client.post("/api/admin/prompts/rating/user/reset")
        assert resp.status_code == 200
        assert resp.json()["content"] == original
        assert resp.json()["edited"] is False

    def test_update_with_bad_role_is_400(self, client):
        resp = client.put("/api/admin/prompts", json={"type": "SUMMARY", "role": "assistant", "content": "x"})
        assert resp.status_code == 400

    def test_refresh(self, client):
        resp = client.post("/api/admin/prompts/refresh")
        assert resp.status_code == 200
        assert resp.json() == "Prompts refreshed successfully"

    def test_edited_prompt_is_sent_to_llm(self, settings, cv_dir):
        (cv_dir / "Anna.txt").write_text("Python developer", encoding="utf-8")
        llm = FakeChatModel()
        client = _client(settings, llm=llm)
        client.put("/api/admin/prompts", json={"type": "SUMMARY", "role": "system", "content": "Custom system"})
        client.post("/api/candidate-matcher/match", json={"vacancyDescription": VACANCY})
        assert llm.calls[0][0].content == "Custom system"


class TestAdminAuth:
    def test_admin_token_accepted(self, settings, client):
        resp = client.get("/api/admin/status", headers={"Authorization": f"Bearer {_token(settings)}"})
        assert resp.status_code == 200

    def test_non_admin_token_is_403(self, settings, client):
        resp = client.get("/api/admin/prompts", headers={"Authorization": f"Bearer {_token(settings, role='user')}"})
        assert resp.status_code == 403

    def test_invalid_token_is_401(self, client):
        resp = client.get("/api/admin/prompts", headers={"Authorization": "Bearer invalid.jwt.token"})
        assert resp.status_code == 401

    def test_token_without_subject_is_401(self, settings, client):
        token = jwt.encode({"role": "admin"}, settings.jwt_secret, algorithm=settings.jwt_algorithm)
        resp = client.get("/api/admin/prompts", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 401

    def test_demo_admin_without_credentials(self, client):
        assert client.get("/api/admin/status").status_code == 200

    def test_app_settings_drive_auth(self, settings):
        strict = settings.model_copy(update={"admin_auth_required": True, "jwt_secret": "app-secret"})
        client = _client(strict)

        assert client.get("/api/admin/prompts").status_code == 401

        own = _token(strict)
        resp = client.get("/api/admin/prompts", headers={"Authorization": f"Bearer {own}"})
        assert resp.status_code == 200

        foreign = jwt.encode({"sub": "x", "role": "admin"}, "other-secret", algorithm=strict.jwt_algorithm)
        resp = client.get("/api/admin/prompts", headers={"Authorization": f"Bearer {foreign}"})
        assert resp.status_code == 401
