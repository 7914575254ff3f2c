"""
Canonical request models for the chat gateway.
"""

from typing import Optional, List, Dict, Any, Literal
from pydantic import BaseModel, Field


class FunctionDefinition(BaseModel):
    """Function definition for tool use."""
    name: str
    description: str = ""
    parameters: Dict[str, Any] = Field(default_factory=dict)


class Tool(BaseModel):
    """Tool definition."""
    type: Literal["function"] = "function"
    function: FunctionDefinition


class FunctionCall(BaseModel):
    """
    Function invocation requested by the model.

    ``arguments`` is the provider's raw JSON text; it is never parsed here.
    """
    name: str
    arguments: str = ""


class ToolCall(BaseModel):
    """Tool call in a message."""
    id: str
    type: Literal["function"] = "function"
    function: FunctionCall


class ChatMessage(BaseModel):
    """
    Canonical conversation message.

    The role is validated at construction; unknown roles never reach a
    wire translator.
    """
    role: Literal["system", "user", "assistant", "tool"]
    content: str
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None

    @classmethod
    def system(cls, content: str) -> "ChatMessage":
        return cls(role="system", content=content)

    @classmethod
    def user(cls, content: str) -> "ChatMessage":
        return cls(role="user", content=content)

    @classmethod
    def assistant(cls, content: str) -> "ChatMessage":
        return cls(role="assistant", content=content)


class ChatRequest(BaseModel):
    """
    Canonical chat completion request.

    Field names follow the OpenAI chat-completions convention; each wire
    protocol translates from this shape.
    """
    # Required
    model: str = Field(..., description="Model identifier")
    messages: List[ChatMessage] = Field(..., min_length=1, description="Full conversation history")

    # Generation parameters
    temperature: float = 0.7
    max_tokens: Optional[int] = Field(default=2048, ge=1)
    stream: bool = False

    # Tool use
    tools: Optional[List[Tool]] = None
    tool_choice: Optional[Literal["auto", "none", "required"]] = None

    # Provider-specific extensions, merged into the wire body
    provider_hints: Optional[Dict[str, Any]] = None

    def system_prompt(self) -> Optional[str]:
        """Content of the first system message, if any."""
        for m in self.messages:
            if m.role == "system":
                return m.content
        return None

    def conversation(self) -> List[ChatMessage]:
        """All non-system messages in their original order."""
        return [m for m in self.messages if m.role != "system"]
