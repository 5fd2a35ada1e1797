"""End-to-end API tests with mock LLMs and a fake Supabase gateway."""

import json

from services.mock_providers import MOCK_CHAT_ANSWER, MOCK_TRANSFORMATIONS

AUTH = {"Authorization": "Bearer valid-token"}
SESSION = {"X-Session-Id": "anon-session-1"}
LONG_TEXT = "This is a long enough piece of text to pass the minimum length check for input."


class TestHealth:

    def test_health(self, api_client):
        assert api_client.get("/health").json() == {"status": "healthy"}


class TestTransformEndpoints:
    """Test suite for /api/transform."""

    def test_transform(self, api_client):
        response = api_client.post("/api/transform", json={
            "content": "Some content", "transformationType": "summary", "title": "Doc"
        })

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["transformedContent"] == MOCK_TRANSFORMATIONS["summary"]
        assert data["originalTitle"] == "Doc"

    def test_transform_requires_content(self, api_client):
        response = api_client.post("/api/transform", json={"transformationType": "summary"})

        assert response.status_code == 400
        assert response.json() == {
            "success": False, "error": "Content and transformation type are required"
        }

    def test_text_saved_for_session(self, api_client):
        response = api_client.post(
            "/api/transform/text", json={"text": LONG_TEXT, "transformationType": "notes"}, headers=SESSION
        )

        assert response.status_code == 200
        data = response.json()
        assert data["saved"] is True
        assert data["result"]["title"] == "Direct Text Input"
        assert data["result"]["transformedContent"] == MOCK_TRANSFORMATIONS["notes"]

        history = api_client.get("/api/history", headers=SESSION).json()
        assert [entry["id"] for entry in history] == [data["result"]["id"]]

    def test_text_saved_for_user(self, api_client):
        response = api_client.post(
            "/api/transform/text", json={"text": LONG_TEXT, "transformationType": "legal"}, headers=AUTH
        )

        assert response.json()["saved"] is True
        assert api_client.gateway.transformations[0]["user_id"] == "user-1"

    def test_text_without_owner_is_not_saved(self, api_client):
        response = api_client.post("/api/transform/text", json={"text": LONG_TEXT})

        assert response.status_code == 200
        assert response.json()["saved"] is False

    def test_text_too_short(self, api_client):
        response = api_client.post("/api/transform/text", json={"text": "short"}, headers=SESSION)

        assert response.status_code == 400
        assert response.json()["error"] == "Please enter at least 50 characters"

    def test_invalid_token(self, api_client):
        response = api_client.post(
            "/api/transform/text", json={"text": LONG_TEXT}, headers={"Authorization": "Bearer nope"}
        )

        assert response.status_code == 401

    def test_url_invalid(self, api_client):
        response = api_client.post("/api/transform/url", json={"url": "example.com"})

        assert response.status_code == 400


class TestChatEndpoint:
    """Test suite for /api/chat."""

    def test_chat(self, api_client):
        response = api_client.post("/api/chat", json={
            "question": "What is it?",
            "context": "Some context",
            "chatHistory": [{"role": "user", "content": "Hi"}],
        })

        data = response.json()
        assert data["success"] is True
        assert data["answer"] == MOCK_CHAT_ANSWER
        assert data["provider"] == "perplexity"
        assert data["question"] == "What is it?"

    def test_chat_requires_question(self, api_client):
        response = api_client.post("/api/chat", json={})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_providers(self, api_client):
        providers = api_client.get("/api/chat/providers").json()["providers"]

        assert [p["id"] for p in providers] == ["perplexity", "gemini"]


class TestFileEndpoints:
    """Test suite for /api/files."""

    def _seed_file(self, gateway, user_id="user-1"):
        gateway.storage["user-1/1.txt"] = b"Uploaded file text"
        gateway.file_uploads["file-1"] = {
            "id": "file-1",
            "user_id": user_id,
            "file_name": "notes.txt",
            "file_type": "text/plain",
            "storage_path": "user-1/1.txt",
        }

    def test_process_requires_auth_header(self, api_client):
        response = api_client.post("/api/files/process", json={"fileId": "file-1", "transformationType": "summary"})

        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}

    def test_process_invalid_token_logs_event(self, api_client):
        response = api_client.post(
            "/api/files/process",
            json={"fileId": "file-1", "transformationType": "summary"},
            headers={"Authorization": "Bearer nope"},
        )

        assert response.status_code == 401
        assert response.json() == {"error": "Invalid authentication"}
        assert api_client.gateway.security_events[0]["action"] == "failed_authentication"

    def test_process(self, api_client):
        self._seed_file(api_client.gateway)

        response = api_client.post(
            "/api/files/process",
            json={"fileId": "file-1", "transformationType": "summary"},
            headers=AUTH,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["title"] == "summary of notes.txt"
        assert data["transformationId"]
        row = api_client.gateway.transformations[0]
        assert row["file_upload_id"] == "file-1"
        assert row["original_content"] == "Uploaded file text"
        assert api_client.gateway.security_events[-1]["action"] == "file_processing_requested"

    def test_process_save_failure_is_not_fatal(self, api_client):
        self._seed_file(api_client.gateway)
        api_client.gateway.fail_inserts = True

        response = api_client.post(
            "/api/files/process",
            json={"fileId": "file-1", "transformationType": "notes"},
            headers=AUTH,
        )

        assert response.status_code == 200
        assert response.json()["transformationId"] is None

    def test_process_other_users_file(self, api_client):
        self._seed_file(api_client.gateway, user_id="someone-else")

        response = api_client.post(
            "/api/files/process",
            json={"fileId": "file-1", "transformationType": "summary"},
            headers=AUTH,
        )

        assert response.status_code == 500
        assert response.json() == {"error": "File not found", "success": False}

    def test_upload_anonymous(self, api_client):
        response = api_client.post("/api/files/upload-multiple", files=[
            ("files", ("notes.txt", b"Plain text notes", "text/plain")),
            ("files", ("run.sh", b"echo hi", "text/plain")),
        ])

        data = response.json()
        assert data["persisted"] is False
        assert len(data["results"]) == 1
        assert data["results"][0]["id"].startswith("temp_")
        assert data["results"][0]["contentPreview"] == "Plain text notes"
        assert data["errors"] == [{"filename": "run.sh", "error": "File type not allowed for security reasons"}]

    def test_upload_authenticated(self, api_client):
        response = api_client.post(
            "/api/files/upload-multiple",
            files=[("files", ("notes.txt", b"Plain text notes", "text/plain"))],
            headers=AUTH,
        )

        result = response.json()["results"][0]
        assert result["storagePath"].startswith("user-1/")
        assert result["storagePath"].endswith(".txt")
        assert api_client.gateway.file_uploads[result["id"]]["file_size"] == 16

    def test_upload_limit_refused(self, api_client):
        api_client.gateway.allow_uploads = False

        response = api_client.post(
            "/api/files/upload-multiple",
            files=[("files", ("notes.txt", b"Plain text notes", "text/plain"))],
            headers=AUTH,
        )

        assert response.status_code == 429

    def test_too_many_files(self, api_client):
        files = [("files", (f"f{i}.txt", b"text", "text/plain")) for i in range(6)]

        assert api_client.post("/api/files/upload-multiple", files=files).status_code == 400

    def test_delete_file(self, api_client):
        self._seed_file(api_client.gateway)

        assert api_client.delete("/api/files/file-1", headers=AUTH).status_code == 200
        assert "file-1" not in api_client.gateway.file_uploads
        assert api_client.delete("/api/files/file-1", headers=AUTH).status_code == 404
        assert api_client.delete("/api/files/file-1").status_code == 401


class TestHistoryEndpoints:
    """Test suite for /api/history."""

    def _save(self, api_client, headers, title="Saved"):
        response = api_client.post("/api/history", headers=headers, json={
            "title": title,
            "transformationType": "summary",
            "transformedContent": "Result",
            "content": "Source",
        })
        assert response.status_code == 200
        return response.json()

    def test_requires_owner(self, api_client):
        assert api_client.get("/api/history").status_code == 401

    def test_invalid_session_id(self, api_client):
        assert api_client.get("/api/history", headers={"X-Session-Id": "bad/../id"}).status_code == 400

    def test_get_delete_clear(self, api_client):
        first = self._save(api_client, SESSION, "First")
        self._save(api_client, SESSION, "Second")

        assert api_client.get(f"/api/history/{first['id']}", headers=SESSION).json()["title"] == "First"
        assert api_client.delete(f"/api/history/{first['id']}", headers=SESSION).status_code == 200
        assert api_client.get(f"/api/history/{first['id']}", headers=SESSION).status_code == 404

        api_client.delete("/api/history", headers=SESSION)
        assert api_client.get("/api/history", headers=SESSION).json() == []

    def test_export(self, api_client):
        self._save(api_client, AUTH, "Mine")

        response = api_client.get("/api/history/export", headers=AUTH)

        assert response.status_code == 200
        assert "mindloom-transformations-" in response.headers["content-disposition"]
        assert [entry["title"] for entry in json.loads(response.text)] == ["Mine"]


class TestAnalyzeEndpoints:
    """Test suite for /api/analyze."""

    def test_analytics(self, api_client):
        data = api_client.post("/api/analyze/analytics", json={"content": "Short text here."}).json()
        assert data["wordCount"] == 3

    def test_legal_filter(self, api_client):
        content = "Breach of this clause may result in a penalty."
        data = api_client.post("/api/analyze/legal", json={"content": content, "filter": "risk"}).json()

        assert [s["type"] for s in data["sections"]] == ["risk"]
        assert data["counts"]["clause"] == 1
        assert data["highRiskCount"] == 1

    def test_legal_unknown_filter(self, api_client):
        response = api_client.post("/api/analyze/legal", json={"content": "x", "filter": "bogus"})
        assert response.status_code == 400

    def test_mindmap(self, api_client):
        data = api_client.post("/api/analyze/mindmap", json={"content": "## A\n## B", "title": "T"}).json()
        assert len(data["nodes"]) == 3

    def test_notes_with_completed(self, api_client):
        data = api_client.post("/api/analyze/notes", json={
            "content": "- one point here\n- two point here", "completed": ["note-1"]
        }).json()

        assert data["notes"][1]["completed"] is True
        assert data["progress"] == 25.0

    def test_language(self, api_client):
        data = api_client.post("/api/analyze/language", json={
            "content": "в и не на", "title": "Doc", "targetLanguage": "de"
        }).json()

        assert data["detectedLanguage"] == "ru"
        assert data["translation"]["targetLanguage"] == "de"
        assert len(data["supportedLanguages"]) == 20


class TestExportEndpoints:
    """Test suite for /api/export."""

    def test_notes(self, api_client):
        response = api_client.post("/api/export/notes", json={"content": "- a point", "title": "My Notes"})

        assert response.headers["content-type"].startswith("text/markdown")
        assert 'filename="My_Notes_study_notes.md"' in response.headers["content-disposition"]
        assert response.text.startswith("# My Notes\n")

    def test_legal(self, api_client):
        response = api_client.post("/api/export/legal", json={"content": "You must pay.", "title": "Lease"})

        assert response.text.startswith("# Legal Analysis: Lease")

    def test_mindmap(self, api_client):
        response = api_client.post("/api/export/mindmap", json={"content": "## A", "title": "Map"})

        assert response.headers["content-type"].startswith("image/svg+xml")
        assert response.text.startswith("<svg")

    def test_translation(self, api_client):
        response = api_client.post("/api/export/translation", json={
            "content": "Hello there", "title": "Greeting", "targetLanguage": "es"
        })

        assert 'filename="Greeting_translated_es.txt"' in response.headers["content-disposition"]
        assert response.text.startswith("[TRANSLATED TO SPANISH]")

    def test_translation_unsupported(self, api_client):
        response = api_client.post("/api/export/translation", json={
            "content": "Hello", "title": "G", "targetLanguage": "xx"
        })

        assert response.status_code == 400


class TestUsageEndpoints:
    """Test suite for /api/usage."""

    def test_increment(self, api_client):
        for _ in range(5):
            status = api_client.post("/api/usage/client-1/increment").json()

        assert status == {"used": 5, "limit": 5, "remaining": 0}
        assert api_client.get("/api/usage/client-1").json()["remaining"] == 0
        assert api_client.get("/api/usage/client-2").json()["remaining"] == 5


class TestWithoutSupabase:
    """Signed-in routes when Supabase has no credentials."""

    def test_upload_with_token(self, unconfigured_api_client):
        response = unconfigured_api_client.post(
            "/api/files/upload-multiple",
            files=[("files", ("notes.txt", b"Plain text notes", "text/plain"))],
            headers=AUTH,
        )

        assert response.status_code == 500
        assert response.json() == {"detail": "Supabase is not configured"}

    def test_delete_with_token(self, unconfigured_api_client):
        response = unconfigured_api_client.delete("/api/files/file-1", headers=AUTH)

        assert response.status_code == 500
        assert response.json() == {"detail": "Supabase is not configured"}

    def test_anonymous_upload_still_works(self, unconfigured_api_client):
        response = unconfigured_api_client.post(
            "/api/files/upload-multiple",
            files=[("files", ("notes.txt", b"Plain text notes", "text/plain"))],
        )

        assert response.status_code == 200
        assert response.json()["persisted"] is False
