"""Text rendering of Hex API responses for tool results."""

import json
from datetime import datetime
from typing import Any

from mcp_server_hex.client.schemas import (
    HexPresignedUrlResponse,
    HexProject,
    HexProjectRun,
    HexRunProjectResponse,
)

STATUS_EMOJI = {
    "SUCCESS": "✅",
    "ERROR": "❌",
    "CANCELLED": "\U0001f6d1",
    "RUNNING": "⏳",
    "PENDING": "⏱️",
}


def format_timestamp(value: str | None) -> str:
    """Render an ISO-8601 timestamp; unparseable values are returned as-is."""
    if not value:
        return "unknown"
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return value
    return parsed.strftime("%Y-%m-%d %H:%M:%S %Z").strip()


def format_json(value: Any) -> str:
    return json.dumps(value, indent=2, default=str)


def _seconds(execution_time_ms: float) -> int:
    return round(execution_time_ms / 1000)


def format_project_list(
    projects: list[HexProject],
    has_more: bool = False,
    next_cursor: str | None = None,
) -> str:
    count = len(projects)
    content = f"Found {count} project{'s' if count != 1 else ''}\n\n"

    if not projects:
        return content + "No projects found in this workspace."

    for index, project in enumerate(projects, start=1):
        content += f"{index}. **{project.name}** ({project.project_id})\n"
        content += f"   Status: {project.status}\n"
        content += f"   Visibility: {project.visibility}\n"
        content += f"   Author: {project.author.name} ({project.author.email})\n"
        content += f"   Updated: {format_timestamp(project.updated_at)}\n"
        if project.description:
            content += f"   Description: {project.description}\n"
        if project.tags:
            content += f"   Tags: {', '.join(project.tags)}\n"
        content += "\n"

    if has_more:
        content += (
            "\n*Note: There are more projects available. Use the 'after' parameter "
            f"with value '{next_cursor}' to get the next page.*"
        )
    return content


def format_project(project: HexProject) -> str:
    content = f"# {project.name}\n\n"
    content += f"**Project ID:** {project.project_id}\n"
    content += f"**Status:** {project.status}\n"
    content += f"**Visibility:** {project.visibility}\n"
    content += f"**Author:** {project.author.name} ({project.author.email})\n"
    content += f"**Workspace:** {project.workspace.name}\n"
    content += f"**Created:** {format_timestamp(project.created_at)}\n"
    content += f"**Updated:** {format_timestamp(project.updated_at)}\n"

    if project.description:
        content += f"\n**Description:**\n{project.description}\n"
    if project.tags:
        content += f"\n**Tags:** {', '.join(project.tags)}\n"
    return content


def format_presigned_url(response: HexPresignedUrlResponse, request_body: dict[str, Any]) -> str:
    content = "**Presigned URL Created Successfully**\n\n"
    content += f"**URL:** {response.url}\n"
    content += f"**Expires:** {format_timestamp(response.expires_at)}\n\n"
    content += "**Configuration:**\n"
    content += f"- Theme: {request_body['theme']}\n"
    content += f"- Hide Header: {str(request_body['hideHeader']).lower()}\n"
    content += f"- Hide Controls: {str(request_body['hideControls']).lower()}\n"
    content += f"- Fullscreen: {str(request_body['fullscreen']).lower()}\n"
    if request_body.get("inputParams"):
        content += f"- Input Parameters: {format_json(request_body['inputParams'])}\n"
    return content


def format_run_started(
    project_id: str,
    response: HexRunProjectResponse,
    input_params: dict[str, Any] | None = None,
) -> str:
    content = "**Project Run Started Successfully**\n\n"
    content += f"**Project ID:** {project_id}\n"
    content += f"**Run ID:** {response.run_id}\n"
    content += f"**Status:** {response.status}\n"
    content += f"**Started At:** {format_timestamp(response.started_at)}\n\n"

    if input_params:
        content += f"**Input Parameters:**\n```json\n{format_json(input_params)}\n```\n\n"

    content += (
        f'*Use `hex_get_run_status` with project_id="{project_id}" and '
        f'run_id="{response.run_id}" to check the progress.*'
    )
    return content


def format_run_status(run: HexProjectRun) -> str:
    content = "**Project Run Status**\n\n"
    content += f"**Project ID:** {run.project_id}\n"
    content += f"**Run ID:** {run.run_id}\n"
    content += f"**Status:** {run.status}\n"
    content += f"**Started At:** {format_timestamp(run.started_at)}\n"

    if run.completed_at:
        content += f"**Completed At:** {format_timestamp(run.completed_at)}\n"
    if run.execution_time:
        content += f"**Execution Time:** {_seconds(run.execution_time)} seconds\n"

    content += f"**Triggered By:** {run.triggered_by.name} ({run.triggered_by.email})\n\n"

    emoji = STATUS_EMOJI.get(run.status, "❓")
    if run.status == "SUCCESS":
        content += f"{emoji} **Run completed successfully!**\n"
        if run.output_params:
            content += f"\n**Output Parameters:**\n```json\n{format_json(run.output_params)}\n```\n"
    elif run.status == "ERROR":
        content += f"{emoji} **Run failed with error:**\n{run.error_message or 'Unknown error'}\n"
    elif run.status == "CANCELLED":
        content += f"{emoji} **Run was cancelled**\n"
    elif run.status == "RUNNING":
        content += f"{emoji} **Run is currently in progress...**\n"
    elif run.status == "PENDING":
        content += f"{emoji} **Run is pending execution...**\n"

    if run.input_params:
        content += f"\n**Input Parameters:**\n```json\n{format_json(run.input_params)}\n```\n"
    return content


def format_run_cancelled(project_id: str, run_id: str) -> str:
    return (
        "**Run Cancelled Successfully**\n\n"
        f"**Project ID:** {project_id}\n"
        f"**Run ID:** {run_id}\n\n"
        "The run has been cancelled and will stop execution."
    )


def format_run_history(project_id: str, runs: list[HexProjectRun]) -> str:
    content = "**Project Run History**\n\n"
    content += f"**Project ID:** {project_id}\n"
    content += f"**Total Runs:** {len(runs)}\n\n"

    if not runs:
        return content + "No runs found for this project."

    for index, run in enumerate(runs, start=1):
        emoji = STATUS_EMOJI.get(run.status, "❓")
        content += f"{index}. {emoji} **{run.status}** ({run.run_id})\n"
        content += f"   Started: {format_timestamp(run.started_at)}\n"
        if run.completed_at:
            content += f"   Completed: {format_timestamp(run.completed_at)}\n"
        if run.execution_time:
            content += f"   Duration: {_seconds(run.execution_time)} seconds\n"
        content += f"   Triggered by: {run.triggered_by.name}\n"
        if run.error_message:
            content += f"   Error: {run.error_message}\n"
        content += "\n"
    return content
