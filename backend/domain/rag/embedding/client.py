"""
Async Jina API client with connection pooling and rate limiting
"""

import logging
import asyncio
from typing import List, Dict, Any, Optional
import httpx
from core.config import settings
from core.exceptions import EmbeddingError
from domain.rag.embedding.base import BaseEmbeddingProvider
from domain.rag.embedding.types import TaskType

logger = logging.getLogger(__name__)

# Collaborator task type -> Jina task
JINA_TASKS: Dict[str, str] = {
    "document": "retrieval.passage",
    "query": "retrieval.query",
}


class JinaEmbeddingClient(BaseEmbeddingProvider):
    """Async client for Jina Embedding API"""

    def __init__(
        self,
        api_key: str = None,
        api_url: str = None,
        model: str = None,
        dimensions: int = None,
        timeout: int = None,
        rate_limit: int = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key or settings.jina_api_key
        if not self.api_key:
            raise EmbeddingError("Jina API key not set. Set JINA_API_KEY environment variable or pass api_key parameter.")

        self.api_url = api_url or settings.jina_api_url
        self.model = model or settings.jina_model
        self.dimensions = dimensions or settings.embedding_dimensions
        self.timeout = timeout or settings.jina_timeout
        self.rate_limit = rate_limit or settings.jina_rate_limit
        self._transport = transport

        # Connection pool
        self._client: Optional[httpx.AsyncClient] = None
        self._rate_limiter = asyncio.Semaphore(self.rate_limit)
        self._last_request_time = 0.0
        self._min_request_interval = 1.0 / self.rate_limit

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client"""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                }
            )
        return self._client

    async def _rate_limit(self):
        """Rate limiting"""
        async with self._rate_limiter:
            loop = asyncio.get_running_loop()
            time_since_last = loop.time() - self._last_request_time
            if time_since_last < self._min_request_interval:
                await asyncio.sleep(self._min_request_interval - time_since_last)
            self._last_request_time = loop.time()

    async def _make_api_call(self, payload: Dict[str, Any]) -> httpx.Response:
        """Make a single API call with rate limiting."""

        await self._rate_limit()
        client = await self._get_client()
        response = await client.post(self.api_url, json=payload)
        response.raise_for_status()
        return response

    def _parse_embeddings(self, data_resp: Dict[str, Any], expected: int) -> List[List[float]]:
        """Pull vectors out of a Jina response, in input order."""
        items = data_resp.get("data") or []
        if len(items) != expected:
            raise EmbeddingError(f"Jina returned {len(items)} embeddings for {expected} inputs")

        items = sorted(items, key=lambda item: item.get("index", 0))
        vectors = [item.get("embedding") or [] for item in items]
        if any(not vector for vector in vectors):
            raise EmbeddingError("Jina returned an empty embedding")
        return vectors

    async def embed_batch(self, texts: List[str], task_type: TaskType = "document") -> List[List[float]]:
        """Embed several texts in one request."""

        if task_type not in JINA_TASKS:
            raise ValueError(
                f"Invalid task_type: {task_type}. Must be one of: 'document', 'query'"
            )
        if not texts:
            raise EmbeddingError("texts list must not be empty")

        payload = {
            "model": self.model,
            "task": JINA_TASKS[task_type],
            "dimensions": self.dimensions,
            "late_chunking": False,
            "truncate": True,
            "input": texts,
        }

        try:
            response = await self._make_api_call(payload)
            return self._parse_embeddings(response.json(), expected=len(texts))

        except httpx.HTTPStatusError as e:
            logger.error(f"Jina API error: {e.response.status_code} - {e.response.text}")
            raise EmbeddingError(f"Jina API error: {e.response.status_code}")
        except EmbeddingError:
            raise
        except Exception as e:
            logger.error(f"Error generating embeddings: {e}")
            raise EmbeddingError(f"Failed to generate embeddings: {e}")

    async def embed(self, text: str, task_type: TaskType = "document") -> List[float]:
        """Embed a single text."""
        vectors = await self.embed_batch([text], task_type)
        return vectors[0]

    async def close(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None
