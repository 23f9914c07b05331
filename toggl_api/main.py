import logging

import tabulate

from toggl_api.api import TogglClient
from toggl_api.api import TogglSession
from toggl_api.config import Config
from toggl_api.config import ConfigError
from toggl_api.result import TogglAPIException
from toggl_api.schemas import Project
from toggl_api.schemas import ReportsDetailedParams
from toggl_api.schemas import Tag

logging.basicConfig(
    level=logging.INFO,
    format="[%(levelname)s] %(message)s",
)

logger = logging.getLogger("toggl-api")


def format_projects(projects: list[Project]) -> str:
    table_data = [
        (project.id, project.name, project.active, project.billable, project.color)
        for project in projects
    ]
    headers = ["ID", "Project", "Active", "Billable", "Color"]
    return tabulate.tabulate(table_data, headers=headers)


def format_tags(tags: list[Tag]) -> str:
    table_data = [(tag.id, tag.name) for tag in tags]
    return tabulate.tabulate(table_data, headers=["ID", "Tag"])


def show_workspace(client: TogglClient, user_agent: str) -> int:
    workspaces = client.get_workspaces().unwrap()
    if not workspaces:
        logger.error("No workspaces found for this API token")
        return 1

    workspace = workspaces[0]
    if workspace.id is None:
        logger.error(f"Workspace '{workspace.name}' has no id")
        return 1

    projects = client.get_workspace_projects(workspace.id).unwrap()
    tags = client.get_workspace_tags(workspace.id).unwrap()
    report = client.get_detailed_report(
        ReportsDetailedParams.new(user_agent, workspace.id)
    ).unwrap()
    # total_grand is in milliseconds
    hours = (report.total_grand or 0) / 3_600_000
    print(
        f"Workspace: {workspace.name} ({workspace.id})\n"
        f"Tracked in the last 7 days: {hours:.2f}h\n\n"
        f"{format_projects(projects)}\n\n"
        f"{format_tags(tags)}\n"
    )
    return 0


def main() -> int:
    try:
        config = Config()
    except ConfigError as e:
        logger.error(e)
        return 1

    logger.setLevel(config.LOG_LEVEL)

    with TogglSession.from_config(config) as session:
        try:
            return show_workspace(TogglClient(session), config.USER_AGENT)
        except TogglAPIException as e:
            logger.error(e)
            return 1


if __name__ == "__main__":
    raise SystemExit(main())
