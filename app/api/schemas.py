"""Pydantic models for API request/response validation."""

from pydantic import BaseModel, Field, field_validator


class QueryRequest(BaseModel):
    """Request body for the query endpoint."""

    query: str = Field(..., min_length=1, description="The user's question")

    @field_validator("query")
    @classmethod
    def query_must_not_be_whitespace_only(cls, v: str) -> str:
        """Validate that query is not whitespace-only."""
        if not v.strip():
            raise ValueError("Query cannot be empty or whitespace-only")
        return v


class SourceModel(BaseModel):
    """A web source the answer was grounded on."""

    uri: str = Field(..., description="URL of the source page")
    title: str = Field(default="", description="Display title, may be empty")


class QueryResponse(BaseModel):
    """Response body for the query endpoint."""

    query: str
    response_html: str = Field(..., description="The answer rendered as HTML")
    sources: list[SourceModel] = Field(default_factory=list)


class SessionResponse(BaseModel):
    """Snapshot of the caller's session."""

    state: str = Field(..., description='One of "idle", "loading", "success", "failed"')
    query: str = ""
    loading: bool = False
    response_html: str = ""
    sources: list[SourceModel] = Field(default_factory=list)
    error: str = ""


class ErrorResponse(BaseModel):
    """Error response body."""

    error: str = Field(..., description="Error message")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="ok")


class StatsResponse(BaseModel):
    """Query statistics response."""

    total_queries: int = Field(..., description="Total number of queries sent to the LLM")
    successes: int = Field(..., description="Number of answered queries")
    failures: int = Field(..., description="Number of failed queries")
    success_rate_percent: float = Field(..., description="Success rate percentage")
    busy_rejections: int = Field(..., description="Submissions rejected while a request was in flight")
    avg_latency_ms: float = Field(..., description="Average LLM round trip in ms")
    avg_sources: float = Field(..., description="Average number of web sources per answer")
    failure_kinds: dict[str, int] = Field(default_factory=dict)
