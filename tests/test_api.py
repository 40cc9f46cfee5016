"""Tests for the FastAPI surface."""

import pytest
from fastapi.testclient import TestClient

from yt_transcript_chat.api import create_app
from yt_transcript_chat.config import Settings
from yt_transcript_chat.errors import NoCaptionsAvailable
from yt_transcript_chat.models import TranscriptSegment
from yt_transcript_chat.services import Services


@pytest.fixture
def client(services):
    with TestClient(create_app(services=services)) as client:
        yield client


@pytest.fixture
def transcript_id(client):
    resp = client.post(
        "/api/extract-transcript",
        json={"youtubeUrl": "https://www.youtube.com/watch?v=dQw4w9WgXcQ"},
    )
    return resp.json()["id"]


class TestExtractTranscript:
    def test_end_to_end(self, client, transcript_provider):
        transcript_provider.fetch_segments.return_value = [
            TranscriptSegment(text="hello", start=0, duration=2),
            TranscriptSegment(text="world", start=2, duration=3),
        ]
        resp = client.post(
            "/api/extract-transcript", json={"youtubeUrl": "https://youtu.be/abc12345678"}
        )

        assert resp.status_code == 200
        data = resp.json()
        assert data["videoId"] == "abc12345678"
        assert data["youtubeUrl"] == "https://youtu.be/abc12345678"
        assert data["title"] == "Test Video"
        assert data["channelName"] == "Test Channel"
        assert len(data["segments"]) == 2
        assert data["segments"][0] == {"text": "hello", "start": 0.0, "duration": 2.0}
        assert isinstance(data["id"], int)
        assert data["createdAt"]

    def test_invalid_url(self, client, metadata_provider, transcript_provider):
        resp = client.post("/api/extract-transcript", json={"youtubeUrl": "https://google.com"})
        assert resp.status_code == 400
        assert resp.json() == {"message": "Invalid YouTube URL"}
        metadata_provider.fetch_metadata.assert_not_called()
        transcript_provider.fetch_segments.assert_not_called()

    def test_same_video_twice(self, client, transcript_provider):
        first = client.post(
            "/api/extract-transcript", json={"youtubeUrl": "https://youtu.be/abc12345678"}
        ).json()
        second = client.post(
            "/api/extract-transcript",
            json={"youtubeUrl": "https://www.youtube.com/watch?v=abc12345678&t=10"},
        ).json()
        assert first["id"] == second["id"]
        assert transcript_provider.fetch_segments.await_count == 1

    def test_provider_failure(self, client, transcript_provider):
        transcript_provider.fetch_segments.side_effect = NoCaptionsAvailable(
            "No transcripts available for this video"
        )
        resp = client.post(
            "/api/extract-transcript", json={"youtubeUrl": "https://youtu.be/abc12345678"}
        )
        assert resp.status_code == 400
        assert resp.json() == {"message": "No transcripts available for this video"}

    def test_missing_field(self, client):
        resp = client.post("/api/extract-transcript", json={})
        assert resp.status_code == 400
        assert "message" in resp.json()


class TestTranscripts:
    def test_save_transcript(self, client):
        payload = {
            "youtubeUrl": "https://youtu.be/ingested123",
            "videoId": "ingested123",
            "title": "Ingested",
            "channelName": "Job",
            "duration": "1:00",
            "segments": [{"text": "from the job", "start": 0, "duration": 1}],
        }
        resp = client.post("/api/transcripts", json=payload)
        assert resp.status_code == 200
        saved = resp.json()
        assert saved["videoId"] == "ingested123"
        assert saved["thumbnailUrl"] is None

        again = client.post("/api/transcripts", json=payload).json()
        assert again["id"] == saved["id"]

    def test_get_transcript(self, client, transcript_id):
        resp = client.get(f"/api/transcripts/{transcript_id}")
        assert resp.status_code == 200
        assert resp.json()["videoId"] == "dQw4w9WgXcQ"

    def test_get_unknown_transcript(self, client):
        resp = client.get("/api/transcripts/999")
        assert resp.status_code == 404
        assert resp.json() == {"message": "Transcript not found"}

    def test_get_transcript_text(self, client, transcript_id):
        resp = client.get(f"/api/transcripts/{transcript_id}/text")
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/plain")
        assert 'filename="Test Video-transcript.txt"' in resp.headers["content-disposition"]
        assert resp.text.splitlines()[0] == "[0] Hello world"
        assert resp.text.splitlines()[-1] == "[10] goodbye world"


class TestSummary:
    def test_summary(self, client, transcript_id, llm):
        resp = client.get(f"/api/transcripts/{transcript_id}/summary")
        assert resp.status_code == 200
        assert resp.json() == {"summary": "The video says hello to the world."}

        client.get(f"/api/transcripts/{transcript_id}/summary")
        assert llm.complete.await_count == 1

    def test_summary_unknown(self, client, llm):
        resp = client.get("/api/transcripts/999/summary")
        assert resp.status_code == 404
        llm.complete.assert_not_called()

    def test_summary_failure(self, client, transcript_id, llm):
        llm.complete.side_effect = RuntimeError("upstream down")
        resp = client.get(f"/api/transcripts/{transcript_id}/summary")
        assert resp.status_code == 500
        assert "try again later" in resp.json()["message"]


class TestChat:
    def test_chat(self, client, transcript_id):
        resp = client.post("/api/chat", json={"transcriptId": transcript_id, "message": "Hi?"})
        assert resp.status_code == 200
        turn = resp.json()
        assert turn["transcriptId"] == transcript_id
        assert turn["message"] == "Hi?"
        assert turn["response"] == "The video says hello to the world."
        assert turn["createdAt"]

    def test_chat_unknown_transcript(self, client, llm):
        resp = client.post("/api/chat", json={"transcriptId": 999, "message": "Hi?"})
        assert resp.status_code == 404
        assert resp.json() == {"message": "Transcript not found"}
        llm.complete.assert_not_called()

    @pytest.mark.parametrize("message", ["", "   "])
    def test_chat_empty_message(self, client, transcript_id, message):
        resp = client.post("/api/chat", json={"transcriptId": transcript_id, "message": message})
        assert resp.status_code == 400
        assert client.get(f"/api/transcripts/{transcript_id}/chat").json() == []

    def test_chat_failure(self, client, transcript_id, llm):
        llm.complete.return_value = ""
        resp = client.post("/api/chat", json={"transcriptId": transcript_id, "message": "Hi?"})
        assert resp.status_code == 500
        assert client.get(f"/api/transcripts/{transcript_id}/chat").json() == []

    def test_history_order(self, client, transcript_id, llm):
        llm.complete.side_effect = ["one", "two", "three"]
        for message in ["first", "second", "third"]:
            client.post("/api/chat", json={"transcriptId": transcript_id, "message": message})

        history = client.get(f"/api/transcripts/{transcript_id}/chat").json()
        assert [t["message"] for t in history] == ["first", "second", "third"]
        assert [t["response"] for t in history] == ["one", "two", "three"]

    def test_history_unknown(self, client):
        resp = client.get("/api/transcripts/999/chat")
        assert resp.status_code == 404


class TestYouTubeData:
    def test_metadata(self, client):
        resp = client.get("/api/get-youtube-data", params={"url": "https://youtu.be/dQw4w9WgXcQ"})
        assert resp.status_code == 200
        body = resp.json()
        assert body["success"] is True
        assert body["data"]["title"] == "Test Video"
        assert body["data"]["channelName"] == "Test Channel"
        assert body["data"]["availableLanguages"] == ["en"]

    def test_invalid_url(self, client):
        resp = client.get("/api/get-youtube-data", params={"url": "nope"})
        assert resp.status_code == 400
        assert resp.json() == {"success": False, "message": "Invalid YouTube URL", "data": None}


class TestAppLifespan:
    def test_builds_services_from_settings(self):
        app = create_app(settings=Settings(_env_file=None))
        with TestClient(app):
            assert isinstance(app.state.services, Services)
