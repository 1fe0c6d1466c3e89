"""Tests for the HTTP analysis service."""

from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from raceguard import __version__
from raceguard.config.schema import RaceGuardConfig
from raceguard.service.app import create_app
from raceguard.sources.models import InputFile


@pytest.fixture
def client(tmp_path: Path) -> TestClient:
    return TestClient(create_app(RaceGuardConfig(), tmp_path))


class TestHealth:
    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "version": __version__}


class TestAnalyze:
    def test_single_file(self, client):
        response = client.post(
            "/analyze",
            files=[("files", ("Cache.java", b"public static Map cache = new HashMap();", "text/plain"))],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["scannedFiles"] == 1
        assert [(i["kind"], i["severity"]) for i in data["issues"]] == [
            ("Java static cache", "high")
        ]
        assert data["summary"] == "Detected 1 potential issue (1 high, 0 medium, 0 low)."

    def test_zip_and_untracked_uploads(self, client, sample_zip_bytes):
        response = client.post(
            "/analyze",
            files=[
                ("files", ("bundle.zip", sample_zip_bytes, "application/zip")),
                ("files", ("notes.md", b"UPDATE t SET a = 1", "text/markdown")),
            ],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["scannedFiles"] == 2
        assert [(i["filename"], i["kind"]) for i in data["issues"]] == [
            ("src/Cache.java", "Java static cache"),
            ("db/q.sql", "SQL SELECT"),
            ("db/q.sql", "NOLOCK hint"),
        ]
        assert data["severityTotals"] == {"low": 0, "medium": 1, "high": 2}

    def test_clean_upload(self, client):
        response = client.post(
            "/analyze",
            files=[("files", ("Greeter.java", b"public class Greeter {}", "text/plain"))],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["issues"] == []
        assert data["summary"] == "No obvious race conditions detected."
        assert len(data["suggestions"]) == 2

    def test_repo_url(self, client):
        fetched = [InputFile("db/schema.sql", "DELETE FROM carts")]
        with patch(
            "raceguard.service.app.fetch_repo_files", new_callable=AsyncMock
        ) as fetch:
            fetch.return_value = fetched
            response = client.post(
                "/analyze", files={"repoUrl": (None, " https://github.com/acme/shop ")}
            )

        assert response.status_code == 200
        assert fetch.await_args.args == ("https://github.com/acme/shop",)
        data = response.json()
        assert [i["kind"] for i in data["issues"]] == ["Transaction scope"]

    def test_blank_repo_url_not_fetched(self, client):
        with patch(
            "raceguard.service.app.fetch_repo_files", new_callable=AsyncMock
        ) as fetch:
            response = client.post("/analyze", files={"repoUrl": (None, "   ")})

        assert response.status_code == 200
        fetch.assert_not_awaited()
        assert response.json()["scannedFiles"] == 0


class TestBadInput:
    CACHE = ("files", ("Cache.java", b"public static Map cache = new HashMap();", "text/plain"))

    def test_text_files_entry_skipped(self, client):
        response = client.post("/analyze", files=[self.CACHE], data={"files": "x"})
        assert response.status_code == 200
        data = response.json()
        assert data["scannedFiles"] == 1
        assert [i["filename"] for i in data["issues"]] == ["Cache.java"]

    def test_undecodable_upload_skipped(self, client):
        response = client.post(
            "/analyze",
            files=[
                ("files", ("bad.js", b"\xff\xfe let a = [];", "text/javascript")),
                self.CACHE,
            ],
        )
        assert response.status_code == 200
        data = response.json()
        assert data["scannedFiles"] == 1
        assert [i["filename"] for i in data["issues"]] == ["Cache.java"]

    def test_broken_multipart_body(self, client):
        response = client.post(
            "/analyze",
            content=b"this is not a multipart body",
            headers={"content-type": "multipart/form-data; boundary=xyz"},
        )
        assert response.status_code == 400
        assert "issues" not in response.json()

    def test_missing_boundary(self, client):
        response = client.post(
            "/analyze",
            content=b"--xyz--",
            headers={"content-type": "multipart/form-data"},
        )
        assert response.status_code == 400

    def test_json_body_rejected(self, client):
        response = client.post("/analyze", json={"files": ["Cache.java"]})
        assert response.status_code == 400
        assert "issues" not in response.json()


class TestCustomRules:
    def test_rules_loaded_from_root(self, tmp_path: Path):
        rules_dir = tmp_path / ".raceguard-rules"
        rules_dir.mkdir()
        (rules_dir / "team.yaml").write_text(
            "- id: SCRIPT_GLOBAL_FLAG\n"
            "  kind: Global flag\n"
            "  problem: Mutable window flag shared across components\n"
            "  suggestion: Keep flags in component state.\n"
            "  severity: low\n"
            "  category: script\n"
            "  pattern: 'window\\.__flag'\n"
        )
        client = TestClient(create_app(RaceGuardConfig(), tmp_path))
        response = client.post(
            "/analyze",
            files=[("files", ("flag.js", b"window.__flag = true;", "text/javascript"))],
        )
        assert [i["kind"] for i in response.json()["issues"]] == ["Global flag"]
