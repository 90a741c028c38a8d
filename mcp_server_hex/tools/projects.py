"""Project tools: listing, details and embedding URLs."""

from typing import Annotated, Any, Literal

from pydantic import Field, StrictBool, StrictInt, StrictStr, StringConstraints

from mcp_server_hex.client.pagination import collect_all, project_pages
from mcp_server_hex.client.schemas import HexPresignedUrlResponse, HexProject, HexProjectList

from .base import ToolGroup, ToolSpec, logger, path_segment
from .formatting import format_presigned_url, format_project, format_project_list
from .schemas import ToolArguments, ToolCallResult

Identifier = Annotated[StrictStr, StringConstraints(min_length=1)]


class ListProjectsArgs(ToolArguments):
    limit: StrictInt = Field(default=20, ge=1, le=100)
    after: StrictStr | None = None
    all_pages: StrictBool = False


class GetProjectArgs(ToolArguments):
    project_id: Identifier


class CreatePresignedUrlArgs(ToolArguments):
    project_id: Identifier
    theme: Literal["light", "dark"] = "light"
    hide_header: StrictBool = False
    hide_controls: StrictBool = False
    fullscreen: StrictBool = False
    input_params: dict[str, Any] | None = None


PROJECT_ID_PROPERTY = {
    "type": "string",
    "description": "The unique identifier of the project",
}


class ProjectTools(ToolGroup):
    """Tools for browsing Hex projects."""

    name = "projects"

    def build_specs(self) -> list[ToolSpec]:
        return [
            ToolSpec(
                name="hex_list_projects",
                description="List all viewable projects in the Hex workspace",
                input_schema={
                    "type": "object",
                    "properties": {
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of projects to return (1-100)",
                            "minimum": 1,
                            "maximum": 100,
                            "default": 20,
                        },
                        "after": {
                            "type": "string",
                            "description": "Pagination cursor for retrieving next page of results",
                        },
                        "all_pages": {
                            "type": "boolean",
                            "description": (
                                "Follow pagination cursors and return every project "
                                "(limit is used as the page size, after is ignored)"
                            ),
                            "default": False,
                        },
                    },
                },
                arguments=ListProjectsArgs,
                handler=self.list_projects,
            ),
            ToolSpec(
                name="hex_get_project",
                description="Get detailed information about a specific Hex project",
                input_schema={
                    "type": "object",
                    "properties": {"project_id": PROJECT_ID_PROPERTY},
                    "required": ["project_id"],
                },
                arguments=GetProjectArgs,
                handler=self.get_project,
            ),
            ToolSpec(
                name="hex_create_presigned_url",
                description="Create a presigned URL for embedding a Hex project",
                input_schema={
                    "type": "object",
                    "properties": {
                        "project_id": PROJECT_ID_PROPERTY,
                        "theme": {
                            "type": "string",
                            "enum": ["light", "dark"],
                            "description": "Theme for the embedded project",
                            "default": "light",
                        },
                        "hide_header": {
                            "type": "boolean",
                            "description": "Whether to hide the header in the embedded view",
                            "default": False,
                        },
                        "hide_controls": {
                            "type": "boolean",
                            "description": "Whether to hide controls in the embedded view",
                            "default": False,
                        },
                        "fullscreen": {
                            "type": "boolean",
                            "description": "Whether to display in fullscreen mode",
                            "default": False,
                        },
                        "input_params": {
                            "type": "object",
                            "description": "Input parameters to pass to the project",
                        },
                    },
                    "required": ["project_id"],
                },
                arguments=CreatePresignedUrlArgs,
                handler=self.create_presigned_url,
            ),
        ]

    async def list_projects(self, args: ListProjectsArgs) -> ToolCallResult:
        logger.debug("Listing projects", limit=args.limit, after=args.after, all_pages=args.all_pages)

        if args.all_pages:
            projects = await collect_all(project_pages(self.gateway, limit=args.limit))
            return ToolCallResult.text(format_project_list(projects))

        response = await self.call_api(
            "/projects", "GET", params={"limit": args.limit, "after": args.after}
        )
        listing = HexProjectList.model_validate(response)
        return ToolCallResult.text(
            format_project_list(listing.projects, listing.has_more, listing.next_cursor)
        )

    async def get_project(self, args: GetProjectArgs) -> ToolCallResult:
        logger.debug("Getting project details", project_id=args.project_id)
        response = await self.call_api(f"/projects/{path_segment(args.project_id)}")
        return ToolCallResult.text(format_project(HexProject.model_validate(response)))

    async def create_presigned_url(self, args: CreatePresignedUrlArgs) -> ToolCallResult:
        request_body: dict[str, Any] = {
            "projectId": args.project_id,
            "theme": args.theme,
            "hideHeader": args.hide_header,
            "hideControls": args.hide_controls,
            "fullscreen": args.fullscreen,
        }
        if args.input_params:
            request_body["inputParams"] = args.input_params

        logger.debug("Creating presigned URL", project_id=args.project_id)
        response = await self.call_api("/presigned-urls", "POST", body=request_body)
        return ToolCallResult.text(
            format_presigned_url(HexPresignedUrlResponse.model_validate(response), request_body)
        )
