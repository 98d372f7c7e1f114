"""
LLM clients
"""

from domain.generation.llm.base import BaseLLMClient
from domain.generation.llm.groq_client import GroqClient
from domain.generation.llm.factory import create_llm_client

__all__ = [
    "BaseLLMClient",
    "GroqClient",
    "create_llm_client",
]
