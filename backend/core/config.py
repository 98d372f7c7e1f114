"""
Unified configuration and settings
Combines LLM, embedding, retrieval and scoring config
"""

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

# Load environment variables
load_dotenv()


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Values can be set via:
    1. Environment variables (highest priority)
    2. .env file (loaded by load_dotenv())
    3. Default values below (lowest priority)
    """

    environment: str = "development"  # development, staging, production
    log_level: str = "INFO"
    log_format: str = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # ------------------------
    # Generation: LLM
    # ------------------------

    llm_provider: str = "groq"  # Options: "groq"
    llm_model: str = "llama-3.3-70b-versatile"
    llm_max_tokens: int = 2000
    llm_temperature: float = 0.8
    llm_timeout: float = 60.0
    groq_api_key: str = ""

    # ------------------------
    # Embedding: Jina Embedding API
    # ------------------------

    jina_api_key: str = ""
    jina_api_url: str = "https://api.jina.ai/v1/embeddings"
    jina_model: str = "jina-embeddings-v3"
    jina_timeout: int = 30
    jina_rate_limit: int = 10  # requests per second

    # Must match between provider and fallback vectors
    embedding_dimensions: int = 768
    embedding_timeout: float = 10.0  # per call, then deterministic fallback
    embedding_max_concurrent: int = 5

    # ------------------------
    # Retrieval
    # ------------------------

    retrieval_rrf_k: int = 60
    retrieval_mmr_lambda: float = 0.7
    retrieval_top_k: int = 5
    retrieval_candidate_pool_size: int = 20
    retrieval_min_query_terms: int = 2  # below this, lexical signal is degenerate
    retrieval_persist_embeddings: bool = True
    bm25_k1: float = 1.5
    bm25_b: float = 0.75

    # ------------------------
    # Scoring & validation
    # ------------------------

    diversity_duplicate_threshold: float = 0.85
    lexical_duplicate_threshold: float = 0.7
    validation_pass_threshold: int = 70
    brand_similarity_floor: float = 0.0
    brand_similarity_ceiling: float = 1.0

    # ------------------------
    # Pipeline
    # ------------------------

    default_variant_count: int = 3
    max_variant_count: int = 10
    scoring_max_concurrent: int = 5
    default_target_audience: str = "general"

    class Config:
        """
        Pydantic configuration for settings loading.

        - env_file: Which .env file to read
        - env_file_encoding: File encoding
        - extra: What to do with extra fields in .env that aren't in this class
        """
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


# Singleton settings instance
settings = Settings()
