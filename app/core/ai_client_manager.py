"""
AI Client Manager

This module manages separate AI client instances for different services to prevent
API contention. Each service type gets its own dedicated client instance.
"""

from openai import AsyncOpenAI
import threading
from typing import Dict, Optional
from loguru import logger
from app.core import config

SERVICE_TYPES = ("conversation", "report", "question")


class AIClientManager:
    """
    Manages dedicated AI client instances for different services.

    Streaming interview turns, report generation and opening questions each
    get their own AsyncOpenAI client so a slow report never queues behind a
    live turn on the same connection pool.
    """

    _instance: Optional['AIClientManager'] = None
    _lock = threading.Lock()

    def __init__(self):
        self._clients: Dict[str, AsyncOpenAI] = {}
        self._initialized = False

    @classmethod
    def get_instance(cls) -> 'AIClientManager':
        """Thread-safe singleton instance getter."""
        if cls._instance is None:
            with cls._lock:
                # Double-check locking pattern
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def _initialize_clients(self):
        """Lazy initialization of client instances."""
        if self._initialized:
            return

        with self._lock:
            if self._initialized:
                return

            api_key = config.OPENAI_API_KEY
            if not api_key:
                raise RuntimeError(
                    "OPENAI_API_KEY environment variable is not set. "
                    "Please set it in your .env file or environment variables."
                )

            try:
                self._clients = {
                    service_type: AsyncOpenAI(api_key=api_key, base_url=config.OPENAI_BASE_URL)
                    for service_type in SERVICE_TYPES
                }
                self._initialized = True
                logger.info(f"Initialized {len(self._clients)} dedicated AI client instances")

            except Exception as e:
                logger.error(f"Failed to initialize AI clients: {e}")
                raise RuntimeError(f"Failed to initialize AI clients: {e}") from e

    def get_client(self, service_type: str) -> AsyncOpenAI:
        """
        Get a dedicated client for the specified service type.

        Args:
            service_type (str): One of "conversation", "report", "question"

        Returns:
            AsyncOpenAI: Dedicated client instance for the service

        Raises:
            ValueError: If service_type is not supported
            RuntimeError: If clients failed to initialize
        """
        self._initialize_clients()

        if service_type not in self._clients:
            raise ValueError(f"Unsupported service type: {service_type}. Available: {list(self._clients.keys())}")

        return self._clients[service_type]


def get_ai_client_manager() -> AIClientManager:
    """Get the singleton AIClientManager instance with lazy initialization."""
    return AIClientManager.get_instance()

def get_conversation_client() -> AsyncOpenAI:
    """Get dedicated client for streaming interview turns."""
    return get_ai_client_manager().get_client("conversation")

def get_report_client() -> AsyncOpenAI:
    """Get dedicated client for report generation."""
    return get_ai_client_manager().get_client("report")

def get_question_client() -> AsyncOpenAI:
    """Get dedicated client for opening questions."""
    return get_ai_client_manager().get_client("question")
