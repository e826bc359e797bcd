"""CLI for qdrant-local.

Provides a rich command-line interface using Typer for:
- Starting and stopping the local Qdrant container
- Reporting container status and waiting for health
- Checking the Docker installation
- Sending desktop and ntfy push notifications
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from qdrant_local.core.config import load_config
from qdrant_local.core.exceptions import QdrantLocalError
from qdrant_local.core.schemas import ContainerStatus, ManagerConfig
from qdrant_local.notifications.ntfy import send_push_notification
from qdrant_local.notifications.system import send_system_notification
from qdrant_local.runners.container_manager import ContainerLifecycleManager
from qdrant_local.runners.docker_env import DockerEnvironment
from qdrant_local.utils.logging import get_logger, setup_logging

app = typer.Typer(
    name="qdrant-local",
    help="Manage a local Qdrant container",
    add_completion=False,
)

console = Console()
logger = get_logger(__name__)

ConfigOption = typer.Option(
    None, "--config", "-c", help="Path to configuration file (YAML/JSON)"
)
DataPathOption = typer.Option(None, "--data-path", help="Host directory for Qdrant storage")
WorkspaceOption = typer.Option(
    None, "--workspace", "-w", help="Workspace root (data kept under .qdrant-local/)"
)
LogLevelOption = typer.Option("WARNING", "--log-level", "-l", help="Logging level")
LogFileOption = typer.Option(
    None, "--log-file", help="Write logs to file in addition to console"
)
JsonLogsOption = typer.Option(
    False, "--json-logs", help="Output logs in JSON format (for programmatic parsing)"
)


def _setup_logging(log_level: str, log_file: Path | None, json_logs: bool) -> None:
    setup_logging(
        level=log_level, log_file=log_file, json_format=json_logs, rich_console=not json_logs
    )


def _load_manager_config(
    config: Path | None,
    data_path: Path | None = None,
    workspace: Path | None = None,
) -> ManagerConfig:
    """Load the config file (if any) and apply CLI overrides."""
    try:
        manager_config = load_config(config) if config is not None else ManagerConfig()
    except Exception as e:
        console.print(f"[bold red]Error loading config: {escape(str(e))}[/]")
        raise typer.Exit(1) from e

    overrides: dict[str, Path] = {}
    if data_path is not None:
        overrides["data_path"] = data_path
    if workspace is not None:
        overrides["workspace_path"] = workspace
    return manager_config.model_copy(update=overrides) if overrides else manager_config


def _build_manager(
    config: Path | None,
    data_path: Path | None = None,
    workspace: Path | None = None,
) -> ContainerLifecycleManager:
    return ContainerLifecycleManager(_load_manager_config(config, data_path, workspace))


@app.command()
def start(
    config: Path | None = ConfigOption,
    data_path: Path | None = DataPathOption,
    workspace: Path | None = WorkspaceOption,
    wait: bool = typer.Option(True, "--wait/--no-wait", help="Wait for the health endpoint"),
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Health wait deadline"),
    notify: bool = typer.Option(False, "--notify", help="Desktop notification when ready"),
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Start the Qdrant container, creating it on first use."""
    _setup_logging(log_level, log_file, json_logs)
    manager = _build_manager(config, data_path, workspace)

    console.print(
        f"[bold blue]Starting {manager.container_name} on port {manager.port}[/] "
        f"(data: {manager.data_path})"
    )
    try:
        manager.start()
        if wait:
            with console.status("Waiting for Qdrant to become healthy..."):
                manager.wait_for_healthy(timeout_ms=timeout_ms)
    except QdrantLocalError as e:
        console.print(f"[bold red]{escape(e.message)}[/]")
        if notify:
            send_system_notification(e.message, subtitle="Qdrant failed to start")
        raise typer.Exit(1) from e

    console.print(f"[bold green]Qdrant is running at {manager.config.health_url}[/]")
    if notify:
        send_system_notification(f"Listening on port {manager.port}", subtitle="Qdrant is ready")


@app.command()
def stop(
    config: Path | None = ConfigOption,
    data_path: Path | None = DataPathOption,
    workspace: Path | None = WorkspaceOption,
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Stop the Qdrant container if it is running."""
    _setup_logging(log_level, log_file, json_logs)
    manager = _build_manager(config, data_path, workspace)

    try:
        manager.stop()
    except QdrantLocalError as e:
        console.print(f"[bold red]{escape(e.message)}[/]")
        raise typer.Exit(1) from e

    console.print(f"[bold green]{manager.container_name} stopped[/]")


@app.command()
def status(
    config: Path | None = ConfigOption,
    data_path: Path | None = DataPathOption,
    workspace: Path | None = WorkspaceOption,
    as_json: bool = typer.Option(False, "--json", help="Print status as JSON"),
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Show the container's state, health and version."""
    _setup_logging(log_level, log_file, json_logs)
    manager = _build_manager(config, data_path, workspace)
    container_status = manager.get_status()

    if as_json:
        typer.echo(json.dumps(container_status.model_dump(), indent=2))
        return

    _show_status_table(manager, container_status)


@app.command()
def wait(
    config: Path | None = ConfigOption,
    data_path: Path | None = DataPathOption,
    workspace: Path | None = WorkspaceOption,
    timeout_ms: int | None = typer.Option(None, "--timeout-ms", help="Deadline in ms"),
    interval_ms: int | None = typer.Option(None, "--interval-ms", help="Probe interval in ms"),
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Block until the health endpoint answers, or fail on timeout."""
    _setup_logging(log_level, log_file, json_logs)
    manager = _build_manager(config, data_path, workspace)

    try:
        manager.wait_for_healthy(timeout_ms=timeout_ms, interval_ms=interval_ms)
    except QdrantLocalError as e:
        console.print(f"[bold red]{escape(e.message)}[/]")
        raise typer.Exit(1) from e

    console.print("[bold green]Qdrant is healthy[/]")


def _confirm_prompt(message: str, options: Sequence[str]) -> str | None:
    """Present the first option as a yes/no question."""
    console.print(f"[bold yellow]{message}[/]")
    if typer.confirm(f"{options[0]}?", default=False):
        return options[0]
    return None


@app.command()
def doctor(
    config: Path | None = ConfigOption,
    data_path: Path | None = DataPathOption,
    workspace: Path | None = WorkspaceOption,
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Check that Docker is installed and its daemon is reachable."""
    _setup_logging(log_level, log_file, json_logs)
    manager_config = _load_manager_config(config, data_path, workspace)
    env = DockerEnvironment(runtime=manager_config.runtime)

    if not env.check_docker_installed():
        console.print(f"[bold red]{manager_config.runtime} CLI not found[/]")
        env.offer_installation(_confirm_prompt)
        raise typer.Exit(1)
    console.print(f"[green]{manager_config.runtime} CLI found[/]")

    if not env.is_docker_running():
        console.print("[bold red]Docker daemon is not running[/]")
        raise typer.Exit(1)
    console.print("[green]Docker daemon is reachable[/]")


@app.command()
def notify(
    message: str = typer.Argument(..., help="Notification body"),
    title: str | None = typer.Option(None, "--title", "-t", help="Notification title"),
    subtitle: str | None = typer.Option(None, "--subtitle", "-s", help="Second line"),
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Show a native desktop notification."""
    _setup_logging(log_level, log_file, json_logs)
    if not send_system_notification(message, title=title, subtitle=subtitle):
        console.print("[bold red]Could not show notification (see log)[/]")
        raise typer.Exit(1)


@app.command()
def push(
    message: str = typer.Argument(..., help="Notification body"),
    config: Path | None = ConfigOption,
    endpoint: str | None = typer.Option(None, "--endpoint", "-e", help="ntfy server URL"),
    topic: str | None = typer.Option(None, "--topic", help="ntfy topic"),
    title: str | None = typer.Option(None, "--title", "-t", help="Notification title"),
    tags: list[str] | None = typer.Option(None, "--tag", help="Tag (repeatable)"),
    priority: int | None = typer.Option(None, "--priority", "-p", min=1, max=5),
    click: str | None = typer.Option(None, "--click", help="URL opened on tap"),
    log_level: str = LogLevelOption,
    log_file: Path | None = LogFileOption,
    json_logs: bool = JsonLogsOption,
) -> None:
    """Send a push notification through ntfy."""
    _setup_logging(log_level, log_file, json_logs)
    ntfy = _load_manager_config(config).ntfy

    try:
        result = send_push_notification(
            message,
            endpoint=endpoint or ntfy.endpoint,
            topic=topic or ntfy.topic,
            title=title,
            tags=tags,
            priority=priority,
            click=click,
            access_token=ntfy.access_token,
            username=ntfy.username,
            password=ntfy.password,
        )
    except QdrantLocalError as e:
        console.print(f"[bold red]{escape(e.message)}[/]")
        raise typer.Exit(1) from e

    logger.debug(f"ntfy accepted message {result.id} with status {result.status}")
    console.print(f"[bold green]Sent[/] (id: {result.id or 'n/a'})")


def _show_status_table(manager: ContainerLifecycleManager, container_status: ContainerStatus) -> None:
    """Display container status in a rich table."""
    table = Table(title=f"Qdrant container: {manager.container_name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value")

    table.add_row("Exists", "yes" if container_status.exists else "no")
    table.add_row(
        "Running",
        "[green]yes[/]" if container_status.running else "[red]no[/]",
    )
    table.add_row("Status", container_status.status or "-")
    table.add_row("Health", container_status.health or "-")
    table.add_row("Version", container_status.version or "-")
    table.add_row("Port", str(manager.port))
    table.add_row("Data", str(manager.data_path))

    console.print(table)


if __name__ == "__main__":
    app()
