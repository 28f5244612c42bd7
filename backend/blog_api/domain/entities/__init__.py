from .article import Article
from .chat_message import ChatMessage, TokenUsage, ChatCompletionResult

__all__ = [
    "Article",
    "ChatMessage",
    "TokenUsage",
    "ChatCompletionResult",
]
