"""Configuration for the outbreak cluster detection service."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Find and load .env file
_env_candidates = [
    Path(__file__).parent.parent / ".env",
    Path(__file__).parent.parent / ".env.template",
]

for env_path in _env_candidates:
    if env_path.exists():
        load_dotenv(env_path)
        break


class Config:
    """Outbreak detection and proactive alert configuration."""

    # --- Database ---
    DB_PATH: str = os.getenv(
        "PREPAREDNESS_DB_PATH",
        str(Path.home() / ".preparedness" / "preparedness.db"),
    )

    # --- Report Window ---
    CLUSTER_WINDOW_HOURS: int = int(os.getenv("CLUSTER_WINDOW_HOURS", "12"))
    REPORT_RETENTION_DAYS: int = int(os.getenv("REPORT_RETENTION_DAYS", "7"))

    # --- Outbreak Rules ---
    # Each rule fires when its summed symptom count reaches the threshold.
    # Confidence starts at the base and grows by 1/divisor per extra report.
    VIRAL_FEVER_THRESHOLD: int = int(os.getenv("VIRAL_FEVER_THRESHOLD", "10"))
    VIRAL_CONFIDENCE_DIVISOR: float = float(os.getenv("VIRAL_CONFIDENCE_DIVISOR", "40"))
    WATERBORNE_GI_THRESHOLD: int = int(os.getenv("WATERBORNE_GI_THRESHOLD", "8"))
    WATERBORNE_CONFIDENCE_DIVISOR: float = float(
        os.getenv("WATERBORNE_CONFIDENCE_DIVISOR", "30")
    )
    RESPIRATORY_COUGH_THRESHOLD: int = int(os.getenv("RESPIRATORY_COUGH_THRESHOLD", "10"))
    RESPIRATORY_CONFIDENCE_DIVISOR: float = float(
        os.getenv("RESPIRATORY_CONFIDENCE_DIVISOR", "40")
    )
    BASE_CONFIDENCE: float = float(os.getenv("BASE_CONFIDENCE", "0.5"))
    MAX_CONFIDENCE: float = float(os.getenv("MAX_CONFIDENCE", "0.95"))

    # --- Proactive Alerts ---
    DENGUE_RAINFALL_MM: float = float(os.getenv("DENGUE_RAINFALL_MM", "20"))
    DENGUE_HUMIDITY_PCT: float = float(os.getenv("DENGUE_HUMIDITY_PCT", "80"))
    DENGUE_MIN_TEMPERATURE_C: float = float(os.getenv("DENGUE_MIN_TEMPERATURE_C", "25"))
    DENGUE_HIGH_HUMIDITY_PCT: float = float(os.getenv("DENGUE_HIGH_HUMIDITY_PCT", "85"))
    FLOOD_RAINFALL_MM: float = float(os.getenv("FLOOD_RAINFALL_MM", "50"))
    ESCALATION_MIN_CONFIDENCE: float = float(os.getenv("ESCALATION_MIN_CONFIDENCE", "0.7"))
    ESCALATION_MIN_REPORTS: int = int(os.getenv("ESCALATION_MIN_REPORTS", "5"))

    # --- LLM Briefing (OpenAI-compatible chat completions) ---
    LLM_BASE_URL: str = os.getenv("LLM_BASE_URL", "https://api.groq.com/openai/v1")
    LLM_MODEL: str = os.getenv("LLM_MODEL", "llama-3.1-8b-instant")
    LLM_API_KEY: str | None = os.getenv("GROQ_API_KEY") or os.getenv("LLM_API_KEY")
    LLM_TIMEOUT_SECONDS: float = float(os.getenv("LLM_TIMEOUT_SECONDS", "15"))
    LLM_TEMPERATURE: float = float(os.getenv("LLM_TEMPERATURE", "0.4"))
    LLM_MAX_TOKENS: int = int(os.getenv("LLM_MAX_TOKENS", "1024"))

    # --- Notifications ---
    ALERT_WEBHOOK_URL: str | None = os.getenv("ALERT_WEBHOOK_URL")
    WEBHOOK_TIMEOUT_SECONDS: float = float(os.getenv("WEBHOOK_TIMEOUT_SECONDS", "10"))

    # --- Monitoring ---
    POLL_INTERVAL: int = int(os.getenv("POLL_INTERVAL", "900"))  # seconds

    # --- Celery ---
    CELERY_BROKER_URL: str = os.getenv("CELERY_BROKER_URL", "redis://localhost:6379/0")
    CELERY_RESULT_BACKEND: str | None = os.getenv("CELERY_RESULT_BACKEND")

    @classmethod
    def is_llm_configured(cls) -> bool:
        """Check if an LLM API key is configured."""
        return bool(cls.LLM_API_KEY)

    @classmethod
    def is_webhook_configured(cls) -> bool:
        """Check if a broadcast webhook is configured."""
        return bool(cls.ALERT_WEBHOOK_URL)


config = Config()
