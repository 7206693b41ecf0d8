from .base import LLMClient
from .factory import build_llm
from .openai_compat import OpenAICompatLLM

__all__ = ["LLMClient", "OpenAICompatLLM", "build_llm"]
