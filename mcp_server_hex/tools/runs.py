"""Run tools: trigger, inspect and cancel project executions."""

from typing import Any, get_args

from pydantic import Field, StrictBool, StrictInt

from mcp_server_hex.client.schemas import (
    HexProjectRun,
    HexRunList,
    HexRunProjectResponse,
    RunStatus,
)

from .base import ToolGroup, ToolSpec, logger, path_segment
from .formatting import (
    format_run_cancelled,
    format_run_history,
    format_run_started,
    format_run_status,
)
from .projects import PROJECT_ID_PROPERTY, Identifier
from .schemas import NotificationConfig, ToolArguments, ToolCallResult

RUN_STATUSES = list(get_args(RunStatus))


class RunProjectArgs(ToolArguments):
    project_id: Identifier
    input_params: dict[str, Any] | None = None
    update_published_results: StrictBool | None = None
    use_cached_sql_results: StrictBool | None = None
    notification_config: NotificationConfig | None = None


class RunRefArgs(ToolArguments):
    project_id: Identifier
    run_id: Identifier


class ProjectRunsArgs(ToolArguments):
    project_id: Identifier
    limit: StrictInt | None = Field(default=None, ge=1, le=100)
    status: RunStatus | None = None


def _run_ref_schema(run_description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "project_id": PROJECT_ID_PROPERTY,
            "run_id": {"type": "string", "description": run_description},
        },
        "required": ["project_id", "run_id"],
    }


class RunTools(ToolGroup):
    """Tools for executing Hex projects and tracking their runs."""

    name = "runs"

    def build_specs(self) -> list[ToolSpec]:
        return [
            ToolSpec(
                name="hex_run_project",
                description="Trigger execution of a Hex project with optional input parameters",
                input_schema={
                    "type": "object",
                    "properties": {
                        "project_id": {
                            "type": "string",
                            "description": "The unique identifier of the project to run",
                        },
                        "input_params": {
                            "type": "object",
                            "description": "Input parameters to pass to the project",
                        },
                        "update_published_results": {
                            "type": "boolean",
                            "description": "Whether to update published app results cache",
                            "default": False,
                        },
                        "use_cached_sql_results": {
                            "type": "boolean",
                            "description": "Whether to use cached SQL query results for performance",
                            "default": True,
                        },
                        "notification_config": {
                            "type": "object",
                            "description": "Notification configuration for run completion",
                            "properties": {
                                "on_success": {
                                    "type": "boolean",
                                    "description": "Send notification on successful completion",
                                    "default": False,
                                },
                                "on_failure": {
                                    "type": "boolean",
                                    "description": "Send notification on failure",
                                    "default": True,
                                },
                                "emails": {
                                    "type": "array",
                                    "items": {"type": "string"},
                                    "description": "Email addresses to notify",
                                },
                            },
                        },
                    },
                    "required": ["project_id"],
                },
                arguments=RunProjectArgs,
                handler=self.run_project,
            ),
            ToolSpec(
                name="hex_get_run_status",
                description="Get the status and details of a specific project run",
                input_schema=_run_ref_schema("The unique identifier of the run"),
                arguments=RunRefArgs,
                handler=self.get_run_status,
            ),
            ToolSpec(
                name="hex_cancel_run",
                description="Cancel an ongoing project run",
                input_schema=_run_ref_schema("The unique identifier of the run to cancel"),
                arguments=RunRefArgs,
                handler=self.cancel_run,
            ),
            ToolSpec(
                name="hex_get_project_runs",
                description="Get the run history for a specific project",
                input_schema={
                    "type": "object",
                    "properties": {
                        "project_id": PROJECT_ID_PROPERTY,
                        "limit": {
                            "type": "integer",
                            "description": "Maximum number of runs to return (1-100)",
                            "minimum": 1,
                            "maximum": 100,
                            "default": 10,
                        },
                        "status": {
                            "type": "string",
                            "enum": RUN_STATUSES,
                            "description": "Filter runs by status",
                        },
                    },
                    "required": ["project_id"],
                },
                arguments=ProjectRunsArgs,
                handler=self.get_project_runs,
            ),
        ]

    async def run_project(self, args: RunProjectArgs) -> ToolCallResult:
        request_body: dict[str, Any] = {"projectId": args.project_id}
        if args.input_params:
            request_body["inputParams"] = args.input_params
        if args.update_published_results is not None:
            request_body["updatePublishedResults"] = args.update_published_results
        if args.use_cached_sql_results is not None:
            request_body["useCachedSqlResults"] = args.use_cached_sql_results
        if args.notification_config is not None:
            notification = args.notification_config
            request_body["notificationConfig"] = {
                "onSuccess": notification.on_success,
                "onFailure": notification.on_failure,
            }
            if notification.emails is not None:
                request_body["notificationConfig"]["emails"] = notification.emails

        logger.debug("Running project", project_id=args.project_id)
        response = await self.call_api(
            f"/projects/{path_segment(args.project_id)}/runs", "POST", body=request_body
        )
        return ToolCallResult.text(
            format_run_started(
                args.project_id,
                HexRunProjectResponse.model_validate(response),
                args.input_params,
            )
        )

    async def get_run_status(self, args: RunRefArgs) -> ToolCallResult:
        logger.debug("Getting run status", project_id=args.project_id, run_id=args.run_id)
        response = await self.call_api(
            f"/projects/{path_segment(args.project_id)}/runs/{path_segment(args.run_id)}"
        )
        return ToolCallResult.text(format_run_status(HexProjectRun.model_validate(response)))

    async def cancel_run(self, args: RunRefArgs) -> ToolCallResult:
        logger.debug("Cancelling run", project_id=args.project_id, run_id=args.run_id)
        await self.call_api(
            f"/projects/{path_segment(args.project_id)}/runs/{path_segment(args.run_id)}/cancel",
            "POST",
        )
        return ToolCallResult.text(format_run_cancelled(args.project_id, args.run_id))

    async def get_project_runs(self, args: ProjectRunsArgs) -> ToolCallResult:
        logger.debug("Getting project runs", project_id=args.project_id)
        response = await self.call_api(
            f"/projects/{path_segment(args.project_id)}/runs",
            "GET",
            params={"limit": args.limit, "status": args.status},
        )
        listing = HexRunList.model_validate(response)
        return ToolCallResult.text(format_run_history(args.project_id, listing.runs))
