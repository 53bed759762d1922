"""LLM integration for the Ride Planner."""

from .providers import (
    LLMClient,
    ModelType,
    RetryConfig,
    extract_json_object,
    get_llm_client,
    reset_llm_client,
)

__all__ = [
    "LLMClient",
    "ModelType",
    "RetryConfig",
    "extract_json_object",
    "get_llm_client",
    "reset_llm_client",
]
