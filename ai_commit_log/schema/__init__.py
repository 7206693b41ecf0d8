from .chat import ChatMessage, ChatRequest, ChatResponse, build_request, extract_commit_message

__all__ = ["ChatMessage", "ChatRequest", "ChatResponse", "build_request", "extract_commit_message"]
