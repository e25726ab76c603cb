"""HTTP surface: operator routes, storefront feeds and error mapping."""

from datetime import date

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from banner_server.core.config import get_settings
from banner_server.core.security import create_access_token
from banner_server.interfaces.http.deps import (
    get_app_settings,
    get_db_session,
    get_ingestion_pipeline,
    get_query_service,
    get_staging_client,
    get_today,
)
from banner_server.main import create_app
from banner_server.modules.banners import BannerQueryService, IngestionPipeline

from fakes import FakeStagingClient, InMemoryBannerRepository

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32
TODAY = date(2024, 1, 15)


class BrokenRepository:
    async def find_all(self):
        raise OperationalError("SELECT * FROM banners", {}, Exception("disk I/O error"))


class FailingCommitSession:
    def __init__(self):
        self.rolled_back = False

    async def commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    async def rollback(self):
        self.rolled_back = True


@pytest.fixture
def staging():
    return FakeStagingClient()


@pytest.fixture
def app(tmp_path, monkeypatch, staging):
    monkeypatch.setenv("DATABASE__URL", f"sqlite+aiosqlite:///{tmp_path}/api.db")
    monkeypatch.setenv("UPLOADS__BUFFER_DIR", str(tmp_path / "uploads"))
    get_settings.cache_clear()
    application = create_app()
    application.dependency_overrides[get_staging_client] = lambda: staging
    application.dependency_overrides[get_today] = lambda: TODAY
    yield application
    get_settings.cache_clear()


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def auth():
    return {"Authorization": f"Bearer {create_access_token('tester')}"}


def upload(client, auth, **fields):
    data = {"title": "Winter sale", "alt": "Snowy storefront", "startDate": "2024-01-01", "endDate": "2024-01-31"}
    data.update(fields)
    return client.post(
        "/api/upload",
        headers=auth,
        data={key: value for key, value in data.items() if value is not None},
        files={"banner": ("hero.png", PNG_BYTES, "image/png")},
    )


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_upload_creates_banner(client, auth, staging):
    response = upload(client, auth)

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["url"] == "https://cdn.example.com/files/hero.png"
    assert body["banner"]["title"] == "Winter sale"
    assert body["banner"]["startDate"] == "2024-01-01"
    assert body["banner"]["sizeBytes"] == len(PNG_BYTES)
    assert staging.calls == ["request", "upload", "finalize"]
    assert staging.uploaded == PNG_BYTES

    listing = client.get("/api/banners", headers=auth).json()
    assert [banner["id"] for banner in listing["banners"]] == [body["banner"]["id"]]


def test_upload_without_file_is_rejected(client, auth, staging):
    response = client.post("/api/upload", headers=auth, data={"title": "No file"})

    assert response.status_code == 400
    assert staging.calls == []


def test_upload_requires_operator_token(client, staging):
    response = client.post("/api/upload", files={"banner": ("hero.png", PNG_BYTES, "image/png")})
    assert response.status_code in (401, 403)

    response = client.post(
        "/api/upload",
        headers={"Authorization": "Bearer not-a-jwt"},
        files={"banner": ("hero.png", PNG_BYTES, "image/png")},
    )
    assert response.status_code == 401
    assert staging.calls == []


def test_upload_rejects_non_operator_role(client):
    headers = {"Authorization": f"Bearer {create_access_token('viewer', role='viewer')}"}

    assert client.get("/api/banners", headers=headers).status_code == 403


def test_upload_with_bad_date_is_rejected(client, auth, staging):
    response = upload(client, auth, startDate="31/01/2024")

    assert response.status_code == 400
    assert staging.calls == []


def test_upload_with_inverted_window_is_rejected(client, auth, staging):
    response = upload(client, auth, startDate="2024-02-01", endDate="2024-01-01")

    assert response.status_code == 400
    assert staging.calls == []


def test_provider_rejection_maps_to_bad_request(app, client, auth):
    app.dependency_overrides[get_staging_client] = lambda: FakeStagingClient(reject=True)

    response = upload(client, auth)

    assert response.status_code == 400
    detail = response.json()["detail"]
    assert detail["error"] == "provider_rejected"
    assert detail["phase"] == "requesting_target"
    assert detail["errors"][0]["message"] == "too large"


def test_upload_failure_maps_to_bad_gateway_and_stores_nothing(app, client, auth):
    app.dependency_overrides[get_staging_client] = lambda: FakeStagingClient(upload_error=True)

    response = upload(client, auth)

    assert response.status_code == 502
    assert response.json()["detail"]["phase"] == "uploading"
    assert client.get("/api/banners", headers=auth).json()["banners"] == []


def test_store_failure_reports_remote_url(app, client, auth, staging, tmp_path):
    app.dependency_overrides[get_ingestion_pipeline] = lambda: IngestionPipeline(
        repository=InMemoryBannerRepository(fail_insert=True),
        staging_client=staging,
        buffer_dir=tmp_path / "uploads",
    )

    response = upload(client, auth)

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "ingestion_inconsistent"
    assert detail["url"] == "https://cdn.example.com/files/hero.png"


def test_admin_listing_reports_status_and_counts(client, auth):
    upload(client, auth, title="running")
    upload(client, auth, title="upcoming", startDate="2024-03-01", endDate=None)
    upload(client, auth, title="finished", startDate="2023-12-01", endDate="2024-01-10")

    body = client.get("/api/banners", headers=auth).json()

    statuses = {banner["title"]: banner["status"] for banner in body["banners"]}
    assert statuses == {"running": "Active", "upcoming": "Scheduled", "finished": "Expired"}
    assert body["counts"] == {"active": 1, "scheduled": 1, "expired": 1}
    assert [banner["title"] for banner in body["banners"]] == ["finished", "upcoming", "running"]


def test_delete_banner(client, auth):
    banner_id = upload(client, auth).json()["banner"]["id"]

    assert client.delete("/api/banners/missing", headers=auth).status_code == 404
    response = client.delete(f"/api/banners/{banner_id}", headers=auth)

    assert response.status_code == 200
    assert response.json() == {"success": True}
    assert client.get("/api/banners", headers=auth).json()["banners"] == []


def test_update_banner_metadata(client, auth):
    banner_id = upload(client, auth).json()["banner"]["id"]

    response = client.put(f"/api/banners/{banner_id}", headers=auth, json={"title": "Renamed", "endDate": None})

    assert response.status_code == 200
    banner = response.json()["banner"]
    assert banner["title"] == "Renamed"
    assert banner["alt"] == "Snowy storefront"
    assert banner["startDate"] == "2024-01-01"
    assert banner["endDate"] is None


def test_update_rejects_inverted_window_and_unknown_id(client, auth):
    banner_id = upload(client, auth).json()["banner"]["id"]

    response = client.put(f"/api/banners/{banner_id}", headers=auth, json={"endDate": "2023-12-31"})
    assert response.status_code == 400

    response = client.put("/api/banners/missing", headers=auth, json={"title": "x"})
    assert response.status_code == 404


def test_active_feed_lists_only_active_banners(client, auth):
    upload(client, auth, title="running")
    upload(client, auth, title="upcoming", startDate="2024-03-01", endDate=None)

    response = client.get("/apps/banner-api/active")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["count"] == 1
    banner = body["banners"][0]
    assert set(banner) == {"id", "title", "alt", "url", "startDate", "endDate"}
    assert banner["title"] == "running"
    assert banner["url"] == "https://cdn.example.com/files/hero.png"


def test_active_feed_store_error(app, client):
    app.dependency_overrides[get_query_service] = lambda: BannerQueryService(BrokenRepository())

    response = client.get("/apps/banner-api/active")

    assert response.status_code == 500
    assert response.json() == {"success": False, "banners": [], "count": 0, "error": "Error loading banners"}


def test_html_fragment(client, auth):
    empty = client.get("/apps/banner")
    assert empty.status_code == 200
    assert "display:none" in empty.text
    assert "<img" not in empty.text

    upload(client, auth)
    response = client.get("/apps/banner")

    assert response.headers["content-type"].startswith("text/html")
    assert 'src="https://cdn.example.com/files/hero.png"' in response.text
    assert 'alt="Snowy storefront"' in response.text


def test_upload_date_must_be_a_complete_iso_value(client, auth, staging):
    response = upload(client, auth, startDate="2024-01-015")

    assert response.status_code == 400
    assert staging.calls == []


def test_upload_accepts_timestamp_and_keeps_the_day(client, auth):
    response = upload(client, auth, startDate="2024-01-05T10:30:00")

    assert response.status_code == 200
    assert response.json()["banner"]["startDate"] == "2024-01-05"


def test_created_at_carries_utc_offset(client, auth):
    upload(client, auth)

    created_at = client.get("/api/banners", headers=auth).json()["banners"][0]["createdAt"]

    assert created_at.endswith("Z") or created_at.endswith("+00:00")


def test_ingestion_deadline_maps_to_gateway_timeout(app, client, auth):
    settings = app.state.settings
    short = settings.model_copy(update={"uploads": settings.uploads.model_copy(update={"ingest_timeout": 0.05})})
    slow = FakeStagingClient(delay=5)
    app.dependency_overrides[get_app_settings] = lambda: short
    app.dependency_overrides[get_staging_client] = lambda: slow

    response = upload(client, auth)

    assert response.status_code == 504
    detail = response.json()["detail"]
    assert detail["error"] == "ingestion_timeout"
    assert detail["phase"] == "finalizing"
    assert client.get("/api/banners", headers=auth).json()["banners"] == []


def test_commit_failure_after_ingest_reports_remote_url(app, client, auth, staging, tmp_path):
    session = FailingCommitSession()
    repository = InMemoryBannerRepository()
    app.dependency_overrides[get_db_session] = lambda: session
    app.dependency_overrides[get_ingestion_pipeline] = lambda: IngestionPipeline(
        repository=repository,
        staging_client=staging,
        buffer_dir=tmp_path / "uploads",
    )

    response = upload(client, auth)

    assert response.status_code == 500
    detail = response.json()["detail"]
    assert detail["error"] == "ingestion_inconsistent"
    assert detail["phase"] == "persisting"
    assert detail["url"] == "https://cdn.example.com/files/hero.png"
    assert session.rolled_back
    assert staging.calls.count("finalize") == 1
