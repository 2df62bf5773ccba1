"""Gemini configuration with environment variable loading.

Pydantic-based configuration for the upstream generative model API.
"""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)

DEFAULT_PERSONA = (
    "You are an AI chat bot that is designed to provide helpful advice and "
    "break downs of complex documents. Please respond without any style "
    "except for paragraph spaces."
)


def _optional_float(name: str) -> float | None:
    value = os.getenv(name)
    return float(value) if value else None


def _optional_int(name: str) -> int | None:
    value = os.getenv(name)
    return int(value) if value else None


class GeminiConfig(BaseModel):
    """Configuration for the Gemini generateContent API.

    Attributes:
        api_key: API key sent with every upstream request.
        base_url: API base URL, up to and including the version segment.
        model_name: Model identifier to use.
        timeout: Upstream request timeout in seconds.
        persona_prompt: Instruction prepended to every conversation.
            Empty disables the preamble.
        temperature: Optional sampling temperature.
        max_output_tokens: Optional cap on generated tokens.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", ""),
        description="API key for the Gemini API",
    )
    base_url: str = Field(
        default_factory=lambda: os.getenv(
            "GEMINI_BASE_URL", "https://generativelanguage.googleapis.com/v1beta"
        ),
        description="Gemini API base URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("GEMINI_MODEL", "gemini-2.0-flash"),
        description="Model to use",
    )
    timeout: float = Field(
        default_factory=lambda: float(os.getenv("GEMINI_TIMEOUT", "60")),
        gt=0,
        description="Upstream request timeout in seconds",
    )
    persona_prompt: str = Field(
        default_factory=lambda: os.getenv("GEMINI_PERSONA", DEFAULT_PERSONA),
        description="Persona instruction prepended to the conversation",
    )
    temperature: float | None = Field(
        default_factory=lambda: _optional_float("GEMINI_TEMPERATURE"),
        ge=0.0,
        le=2.0,
        description="Sampling temperature for response generation",
    )
    max_output_tokens: int | None = Field(
        default_factory=lambda: _optional_int("GEMINI_MAX_OUTPUT_TOKENS"),
        ge=1,
        description="Maximum tokens in generated response",
    )

    @field_validator("api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        """Strip whitespace; a missing key is reported but not fatal."""
        v = v.strip()
        if not v:
            logger.warning("GEMINI_API_KEY is not set; upstream calls will be rejected")
        return v

    @field_validator("base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Normalize the base URL so paths can be appended."""
        return v.rstrip("/")

    @property
    def generate_url(self) -> str:
        """Full URL of the generateContent method for the configured model."""
        return f"{self.base_url}/models/{self.model_name}:generateContent"


def get_gemini_config() -> GeminiConfig:
    """Create Gemini configuration from environment.

    Returns:
        Configured GeminiConfig instance.
    """
    return GeminiConfig()
