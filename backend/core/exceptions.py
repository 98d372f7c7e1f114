"""
Custom exception hierarchy for the application
"""


class RAGException(Exception):
    """Base exception for retrieval and scoring errors"""
    pass


class EmbeddingError(RAGException):
    """Error during embedding generation"""
    pass


class StorageError(RAGException):
    """Error during storage operations"""
    pass


class RetrievalError(RAGException):
    """Error during retrieval operations"""
    pass


class EvaluationError(RAGException):
    """Error during content scoring or validation"""
    pass


class GenerationException(Exception):
    """Base exception for content generation errors"""
    pass


class InvalidPromptError(GenerationException):
    """Prompt is empty or not text"""
    pass


class GenerationError(GenerationException):
    """Generation produced no usable variants"""
    pass


class LLMError(GenerationException):
    """Error during LLM operations"""
    pass
