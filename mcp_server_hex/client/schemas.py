"""Pydantic models for Hex API payloads."""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

RunStatus = Literal["PENDING", "RUNNING", "SUCCESS", "ERROR", "CANCELLED"]


class HexModel(BaseModel):
    """Lenient base for response payloads: unknown fields are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)


class ApiErrorDetail(BaseModel):
    """Error object inside an error-shaped Hex response.

    Attributes:
        code: Service-defined error code.
        message: Human-readable error message.
        details: Optional additional error data.
    """

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: dict[str, Any] | None = Field(default=None, description="Additional error data")


class ApiErrorResponse(BaseModel):
    """Error-shaped Hex response body: ``{"error": {"code", "message"}}``."""

    error: ApiErrorDetail


class HexUser(HexModel):
    user_id: str | None = Field(default=None, alias="userId")
    name: str = ""
    email: str = ""


class HexWorkspace(HexModel):
    workspace_id: str | None = Field(default=None, alias="workspaceId")
    name: str = ""


class HexProject(HexModel):
    """A Hex project as returned by ``/projects``."""

    project_id: str = Field(..., alias="projectId")
    name: str = ""
    description: str | None = None
    status: str | None = None
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    author: HexUser = Field(default_factory=HexUser)
    workspace: HexWorkspace = Field(default_factory=HexWorkspace)
    visibility: str | None = None
    tags: list[str] = Field(default_factory=list)


class HexProjectList(HexModel):
    """One page of ``GET /projects``."""

    projects: list[HexProject] = Field(default_factory=list)
    has_more: bool = Field(default=False, alias="hasMore")
    next_cursor: str | None = Field(default=None, alias="nextCursor")


class HexProjectRun(HexModel):
    """A single project run."""

    run_id: str = Field(..., alias="runId")
    project_id: str | None = Field(default=None, alias="projectId")
    status: str = "PENDING"
    started_at: str | None = Field(default=None, alias="startedAt")
    completed_at: str | None = Field(default=None, alias="completedAt")
    execution_time: float | None = Field(default=None, alias="executionTime")
    input_params: dict[str, Any] | None = Field(default=None, alias="inputParams")
    output_params: dict[str, Any] | None = Field(default=None, alias="outputParams")
    error_message: str | None = Field(default=None, alias="errorMessage")
    triggered_by: HexUser = Field(default_factory=HexUser, alias="triggeredBy")


class HexRunList(HexModel):
    """Response of ``GET /projects/{id}/runs``."""

    runs: list[HexProjectRun] = Field(default_factory=list)


class HexRunProjectResponse(HexModel):
    """Response of ``POST /projects/{id}/runs``."""

    run_id: str = Field(..., alias="runId")
    status: str = "PENDING"
    started_at: str | None = Field(default=None, alias="startedAt")


class HexPresignedUrlResponse(HexModel):
    """Response of ``POST /presigned-urls``."""

    url: str
    expires_at: str | None = Field(default=None, alias="expiresAt")
