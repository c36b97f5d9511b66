"""Tests for LLM outbreak briefings."""

import json
from datetime import datetime
from unittest.mock import MagicMock, patch

import pytest
import requests

from preparedness_src.enrichment import OutbreakBriefingClient, enrich_detection
from preparedness_src.exceptions import EnrichmentUnavailable
from preparedness_src.models import ClusterResult, DetectionResult


BRIEFING = {
    "briefing": "Fever cluster in Mumbai.",
    "priorityActions": ["Deploy medical camp"],
    "riskSummary": "Moderate",
}


def make_detection(clusters=True):
    cluster = ClusterResult(
        area="mumbai",
        predicted_disease_type="Viral Infection Outbreak",
        detection_rule="viral",
        symptom_counts={"fever": 12},
        total_reports=12,
        confidence=0.55,
        recommended_authority_action=["Deploy medical camp with fever medication"],
    )
    return DetectionResult(
        analysed_at=datetime(2026, 10, 18, 12, 0),
        window_hours=12,
        clusters=[cluster] if clusters else [],
    )


def llm_response(content, status_code=200):
    response = MagicMock()
    response.status_code = status_code
    response.text = content
    response.json.return_value = {"choices": [{"message": {"content": content}}]}
    return response



def raw_response(payload):
    response = MagicMock()
    response.status_code = 200
    response.text = json.dumps(payload)
    response.json.return_value = payload
    return response

@pytest.fixture
def client():
    return OutbreakBriefingClient(
        model="llama-3.1-8b-instant",
        base_url="https://llm.example/v1/",
        api_key="test-key",
        timeout=5,
    )


class TestOutbreakBriefingClient:
    """Chat-completions request and reply parsing."""

    @patch("preparedness_src.enrichment.requests.post")
    def test_generate_briefing(self, mock_post, client):
        mock_post.return_value = llm_response(json.dumps(BRIEFING))

        briefing = client.generate_briefing(make_detection().clusters)

        assert briefing == BRIEFING
        url = mock_post.call_args.args[0]
        kwargs = mock_post.call_args.kwargs
        assert url == "https://llm.example/v1/chat/completions"
        assert kwargs["headers"]["Authorization"] == "Bearer test-key"
        assert kwargs["timeout"] == 5
        assert kwargs["json"]["model"] == "llama-3.1-8b-instant"
        prompt = kwargs["json"]["messages"][1]["content"]
        assert "Area: mumbai" in prompt
        assert "Confidence: 55%" in prompt

    @patch("preparedness_src.enrichment.requests.post")
    def test_reply_with_surrounding_text(self, mock_post, client):
        mock_post.return_value = llm_response(
            f"Here is the briefing:\n{json.dumps(BRIEFING)}\nStay safe."
        )
        assert client.generate_briefing(make_detection().clusters) == BRIEFING

    @patch("preparedness_src.enrichment.requests.post")
    def test_timeout(self, mock_post, client):
        mock_post.side_effect = requests.Timeout("timed out")
        with pytest.raises(EnrichmentUnavailable):
            client.generate_briefing(make_detection().clusters)

    @patch("preparedness_src.enrichment.requests.post")
    def test_http_error(self, mock_post, client):
        mock_post.return_value = llm_response("rate limited", status_code=429)
        with pytest.raises(EnrichmentUnavailable, match="429"):
            client.generate_briefing(make_detection().clusters)

    @patch("preparedness_src.enrichment.requests.post")
    def test_reply_without_json(self, mock_post, client):
        mock_post.return_value = llm_response("I cannot help with that.")
        with pytest.raises(EnrichmentUnavailable):
            client.generate_briefing(make_detection().clusters)

    @pytest.mark.parametrize("payload", [
        ["unexpected"],
        "unexpected",
        {"choices": "none"},
        {"choices": ["not a dict"]},
        {"choices": [{"message": "not a dict"}]},
        {"choices": [{"message": {"content": ["not", "text"]}}]},
        {"choices": [{"message": {"content": None}}]},
    ])
    @patch("preparedness_src.enrichment.requests.post")
    def test_malformed_payload(self, mock_post, client, payload):
        mock_post.return_value = raw_response(payload)
        with pytest.raises(EnrichmentUnavailable):
            client.generate_briefing(make_detection().clusters)

    @patch("preparedness_src.enrichment.requests.post")
    def test_no_api_key(self, mock_post):
        client = OutbreakBriefingClient(api_key="")
        client.api_key = None

        assert not client.is_available()
        with pytest.raises(EnrichmentUnavailable):
            client.generate_briefing(make_detection().clusters)
        mock_post.assert_not_called()


class TestEnrichDetection:
    """Briefing attached to detection output."""

    @patch("preparedness_src.enrichment.requests.post")
    def test_adds_briefing(self, mock_post, client):
        mock_post.return_value = llm_response(json.dumps(BRIEFING))
        detection = make_detection()

        data = enrich_detection(detection, client)

        assert data["aiBriefing"] == BRIEFING
        assert data["clusters"] == detection.to_dict()["clusters"]

    @patch("preparedness_src.enrichment.requests.post")
    def test_failure_leaves_clusters_unchanged(self, mock_post, client):
        mock_post.side_effect = requests.ConnectionError("unreachable")
        detection = make_detection()

        data = enrich_detection(detection, client)

        assert "aiBriefing" not in data
        assert data == detection.to_dict()

    @patch("preparedness_src.enrichment.requests.post")
    def test_malformed_payload_leaves_clusters_unchanged(self, mock_post, client):
        mock_post.return_value = raw_response(["unexpected"])
        detection = make_detection()

        data = enrich_detection(detection, client)

        assert data == detection.to_dict()

    @patch("preparedness_src.enrichment.requests.post")
    def test_no_clusters_skips_llm(self, mock_post, client):
        data = enrich_detection(make_detection(clusters=False), client)

        assert "aiBriefing" not in data
        assert data["clustersDetected"] == 0
        mock_post.assert_not_called()
