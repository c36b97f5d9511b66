"""LLM-based outbreak briefing.

Optional decorator over cluster detection output. Asks an
OpenAI-compatible chat-completions endpoint (Groq by default) for an
authority briefing. Failures never affect the detection result.
"""

import json
import logging
import re
import time

import requests

from .config import config
from .exceptions import EnrichmentUnavailable
from .models import ClusterResult, DetectionResult
from .rules import confidence_percent

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = (
    "You are a public health authority advisor. Respond ONLY with a JSON object "
    'containing: { "briefing": "...", "priorityActions": ["..."], "riskSummary": "..." }. '
    "No other text."
)


class OutbreakBriefingClient:
    """Generate authority briefings for detected clusters using an LLM."""

    def __init__(
        self,
        model: str | None = None,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
    ):
        """Initialize the client.

        Args:
            model: LLM model name. Uses config default if None.
            base_url: API base URL. Uses config default if None.
            api_key: Bearer token. Uses config default if None.
            timeout: Request timeout in seconds. Uses config default if None.
        """
        self.model = model or config.LLM_MODEL
        self.base_url = (base_url or config.LLM_BASE_URL).rstrip("/")
        self.api_key = api_key or config.LLM_API_KEY
        self.timeout = timeout or config.LLM_TIMEOUT_SECONDS

    def is_available(self) -> bool:
        """An API key is the only prerequisite; reachability is checked per call."""
        return bool(self.api_key)

    def generate_briefing(self, clusters: list[ClusterResult]) -> dict:
        """Ask the LLM for a briefing on the given clusters.

        Returns:
            Dict with briefing, priorityActions and riskSummary

        Raises:
            EnrichmentUnavailable: on missing key, HTTP error, timeout or
                an unparseable reply
        """
        if not clusters:
            raise EnrichmentUnavailable("No clusters to brief on")
        if not self.is_available():
            raise EnrichmentUnavailable("No LLM API key configured")

        start_time = time.time()
        content = self._call_llm(self._build_prompt(clusters))
        briefing = self._extract_json(content)
        elapsed_ms = int((time.time() - start_time) * 1000)

        if not briefing:
            raise EnrichmentUnavailable("LLM reply contained no JSON object")

        logger.info(f"Outbreak briefing generated in {elapsed_ms}ms for {len(clusters)} clusters")
        return briefing

    def _build_prompt(self, clusters: list[ClusterResult]) -> str:
        summary = "\n".join(
            f"Area: {c.area}, Disease: {c.predicted_disease_type}, "
            f"Confidence: {confidence_percent(c.confidence)}%, Reports: {c.total_reports}, "
            f"Symptoms: {json.dumps(c.symptom_counts)}"
            for c in clusters
        )
        return f"Analyse these outbreak clusters and provide an authority briefing:\n{summary}"

    def _call_llm(self, prompt: str) -> str:
        """Call the chat-completions API and return the reply text."""
        try:
            response = requests.post(
                f"{self.base_url}/chat/completions",
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": config.LLM_TEMPERATURE,
                    "max_tokens": config.LLM_MAX_TOKENS,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise EnrichmentUnavailable(f"LLM request failed: {e}") from e

        if response.status_code != 200:
            raise EnrichmentUnavailable(
                f"LLM API error: {response.status_code} - {response.text[:200]}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise EnrichmentUnavailable(f"LLM API returned invalid JSON: {e}") from e

        if not isinstance(payload, dict):
            raise EnrichmentUnavailable("LLM API returned an unexpected payload")

        choices = payload.get("choices")
        if not isinstance(choices, list) or not choices:
            raise EnrichmentUnavailable("LLM API returned no choices")

        choice = choices[0]
        message = choice.get("message") if isinstance(choice, dict) else None
        content = message.get("content") if isinstance(message, dict) else None
        if not isinstance(content, str):
            raise EnrichmentUnavailable("LLM API reply has no text content")
        return content

    def _extract_json(self, text: str) -> dict:
        """Extract the outermost JSON object from a reply that may have surrounding text."""
        match = re.search(r"\{.*\}", text, re.DOTALL)
        if not match:
            return {}
        try:
            data = json.loads(match.group())
        except json.JSONDecodeError as e:
            logger.debug(f"Failed to parse LLM JSON: {e}")
            return {}
        return data if isinstance(data, dict) else {}


def enrich_detection(
    result: DetectionResult,
    client: OutbreakBriefingClient | None = None,
) -> dict:
    """Serialize a detection result, adding an AI briefing when one is available.

    The clusters are serialized before the LLM is consulted and are never
    modified by it.
    """
    data = result.to_dict()
    if not result.clusters:
        return data

    client = client or OutbreakBriefingClient()
    try:
        data["aiBriefing"] = client.generate_briefing(result.clusters)
    except EnrichmentUnavailable as e:
        logger.warning(f"Outbreak briefing skipped: {e}")

    return data
