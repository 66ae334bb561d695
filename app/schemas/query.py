"""Schemas for the QueryChatbot endpoint and the outbound knowledge-base query."""

from pydantic import BaseModel, ConfigDict, Field

from app.core.config import DEFAULT_QUESTION, TOP_ANSWERS


class QuestionRequest(BaseModel):
    """Inbound body for GET/POST /api/QueryChatbot. Unknown fields are ignored."""

    model_config = ConfigDict(strict=True)

    question: str | None = Field(None, description="User question; the default question is used when missing or empty.")

    def resolved_question(self) -> str:
        return self.question or DEFAULT_QUESTION


class KnowledgeBaseQuery(BaseModel):
    """Body sent to the knowledge-base query endpoint."""

    question: str = Field(..., min_length=1)
    top: int = Field(TOP_ANSWERS, description="Number of answers requested.")


class ErrorResponse(BaseModel):
    """Error body returned for every failed invocation."""

    error: str
    details: str | None = None

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {"error": "Invalid request format"},
                {"error": "An error occurred processing your request", "details": "QA_KNOWLEDGE_BASE_ID environment variable is not defined"},
            ]
        }
    )
