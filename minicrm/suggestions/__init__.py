"""Campaign message suggestions."""

from minicrm.suggestions.models import MessageSuggestion, MessageTone
from minicrm.suggestions.suggester import MessageSuggester, fallback_suggestions

__all__ = [
    "MessageSuggester",
    "MessageSuggestion",
    "MessageTone",
    "fallback_suggestions",
]
