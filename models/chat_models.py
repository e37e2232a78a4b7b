"""
Data models for completion processing.
"""
from dataclasses import dataclass, field


@dataclass
class UpstreamCall:
    """
    One resolved call against the upstream completion API.
    Holds everything needed to issue the request, so it can be logged and inspected.
    """
    model: str
    messages: list[dict] = field(default_factory=list)
    temperature: float = 0.6

    @property
    def message_count(self) -> int:
        return len(self.messages)

    def to_kwargs(self) -> dict:
        """Keyword arguments for chat.completions.create."""
        return {
            "model": self.model,
            "messages": self.messages,
            "temperature": self.temperature,
        }
