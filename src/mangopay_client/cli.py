"""Command-line interface for inspecting a MangoPay account."""
from __future__ import annotations

import json
from collections.abc import Mapping, MutableMapping, Sequence
from pathlib import Path
from typing import Any

import typer

try:  # pragma: no cover - exercised in runtime environments
    from rich import box
    from rich.console import Console
    from rich.table import Table
except ImportError as exc:  # pragma: no cover - optional dependency guard
    raise RuntimeError(
        "The CLI requires Rich for table rendering. Install the CLI extras via "
        "'pip install mangopay-client[cli]' to enable this command."
    ) from exc

from . import MangoPayClient
from .cli_schema import CLI_TABLE_VIEWS, TableView
from .exceptions import ApiError, AuthError, MangoPayError

app = typer.Typer(help="MangoPay API command line tool.", no_args_is_help=True)

users_app = typer.Typer(help="User operations.")
wallets_app = typer.Typer(help="Wallet operations.")
hooks_app = typer.Typer(help="Webhook operations.")
events_app = typer.Typer(help="Event log operations.")
responses_app = typer.Typer(help="Idempotent response lookups.")
app.add_typer(users_app, name="users")
app.add_typer(wallets_app, name="wallets")
app.add_typer(hooks_app, name="hooks")
app.add_typer(events_app, name="events")
app.add_typer(responses_app, name="responses")


def _build_client(
    client_id: str,
    passphrase: str,
    preproduction: bool,
    root_url: str | None,
    temp_dir: Path | None,
    timeout: float | None,
) -> MangoPayClient:
    if not client_id or not passphrase:
        raise typer.BadParameter("--client-id and --passphrase are required.")

    resolved_temp: str | None = None
    if temp_dir:
        expanded = temp_dir.expanduser()
        if expanded.exists() and not expanded.is_dir():
            raise typer.BadParameter("--temp-dir must point to a directory.")
        resolved_temp = str(expanded)

    return MangoPayClient(
        client_id=client_id,
        client_passphrase=passphrase,
        preproduction=preproduction,
        root_url=root_url,
        temp_dir=resolved_temp,
        timeout=timeout,
    )


def _echo_json(payload: Any) -> None:
    typer.echo(json.dumps(payload, indent=2))


console = Console(force_terminal=False, color_system=None)


def _render_rich_table(view: TableView, rows: Sequence[Mapping[str, Any]]) -> None:
    table = Table(
        title=view.title,
        box=box.SIMPLE,
        show_lines=False,
        header_style="bold cyan",
    )
    for column in view.columns:
        table.add_column(column.header, justify=column.justify)
    ordered_rows = list(rows)
    if view.sort_key:
        ordered_rows.sort(key=view.sort_key)
    for row in ordered_rows:
        table.add_row(*(column.render(row) for column in view.columns))
    console.print(table)


def _present_output(payload: Any, *, view_id: str | None, json_output: bool) -> None:
    if json_output or view_id is None:
        _echo_json(payload)
        return
    view = CLI_TABLE_VIEWS.get(view_id)
    if not view:
        _echo_json(payload)
        return
    if not isinstance(payload, Sequence) or isinstance(payload, (str, bytes)):
        _echo_json(payload)
        return
    rows = [item for item in payload if isinstance(item, Mapping)]
    if not rows:
        _echo_json(payload)
        return
    _render_rich_table(view, rows)


def _present_page(filters: Mapping[str, Any], *, json_output: bool) -> None:
    if json_output or "total_pages" not in filters:
        return
    typer.secho(
        f"Page {filters.get('page', 1)} of {filters['total_pages']} "
        f"({filters.get('total_items', 0)} items)",
        err=True,
    )


def _handle_error(exc: MangoPayError) -> None:
    if isinstance(exc, ApiError):
        message = f"Request failed (status {exc.status_code}): {exc}"
        if exc.details:
            message += f"\nDetails: {json.dumps(exc.details)}"
    elif isinstance(exc, AuthError):
        message = f"Authentication failed: {exc}"
    else:
        message = str(exc)
    typer.secho(message, err=True, fg=typer.colors.RED)
    raise typer.Exit(code=1)


def _page_filters(page: int | None, per_page: int | None, **extra: Any) -> MutableMapping[str, Any]:
    filters: dict[str, Any] = {}
    if page is not None:
        filters["page"] = page
    if per_page is not None:
        filters["per_page"] = per_page
    filters.update({key: value for key, value in extra.items() if value is not None})
    return filters


def _shared_options() -> dict[str, Any]:  # pragma: no cover - helper indirection
    return {
        "client_id": typer.Option(
            ..., "--client-id", envvar="MANGOPAY_CLIENT_ID", help="MangoPay client identifier."
        ),
        "passphrase": typer.Option(
            ...,
            "--passphrase",
            envvar="MANGOPAY_CLIENT_PASSPHRASE",
            help="MangoPay API key (client passphrase).",
            hide_input=True,
        ),
        "preproduction": typer.Option(
            False,
            "--sandbox/--production",
            envvar="MANGOPAY_PREPRODUCTION",
            help="Target the sandbox environment instead of production.",
            show_default=True,
        ),
        "root_url": typer.Option(
            None,
            "--root-url",
            envvar="MANGOPAY_ROOT_URL",
            help="Override the API root URL.",
        ),
        "temp_dir": typer.Option(
            None,
            "--temp-dir",
            envvar="MANGOPAY_TEMP_DIR",
            help="Directory used to cache OAuth tokens between runs.",
        ),
        "timeout": typer.Option(
            None,
            "--timeout",
            envvar="MANGOPAY_TIMEOUT",
            help="Request timeout (seconds); waits indefinitely when unset.",
        ),
        "output_json": typer.Option(
            False,
            "--json",
            "-j",
            help="Return raw JSON instead of rendering a table.",
        ),
        "page": typer.Option(None, "--page", min=1, help="Page number to fetch."),
        "per_page": typer.Option(None, "--per-page", min=1, max=100, help="Items per page."),
    }


_SHARED_OPTIONS = _shared_options()


@users_app.command("get")
def users_get(
    user_id: str = typer.Argument(..., help="User identifier."),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show a single user."""

    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            user = client.users.get(user_id)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _echo_json(user)


@users_app.command("list")
def users_list(
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List users of the client account."""

    filters = _page_filters(page, per_page)
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            users = client.users.list(filters)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _present_output(users, view_id="users.list", json_output=output_json)
    _present_page(filters, json_output=output_json)


@users_app.command("wallets")
def users_wallets(
    user_id: str = typer.Argument(..., help="User identifier."),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List the wallets owned by a user."""

    filters = _page_filters(page, per_page)
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            wallets = client.users.wallets(user_id, filters)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _present_output(wallets, view_id="wallets.list", json_output=output_json)
    _present_page(filters, json_output=output_json)


@wallets_app.command("get")
def wallets_get(
    wallet_id: str = typer.Argument(..., help="Wallet identifier."),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
) -> None:
    """Show a single wallet."""

    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            wallet = client.wallets.get(wallet_id)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _echo_json(wallet)


@wallets_app.command("transactions")
def wallets_transactions(
    wallet_id: str = typer.Argument(..., help="Wallet identifier."),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    status: str | None = typer.Option(None, "--status", help="Filter by transaction status."),
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List transactions recorded against a wallet."""

    filters = _page_filters(page, per_page, Status=status)
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            transactions = client.wallets.transactions(wallet_id, filters)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _present_output(transactions, view_id="transactions.list", json_output=output_json)
    _present_page(filters, json_output=output_json)


@hooks_app.command("list")
def hooks_list(
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List registered webhooks."""

    filters = _page_filters(page, per_page)
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            hooks = client.hooks.list(filters)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _present_output(hooks, view_id="hooks.list", json_output=output_json)
    _present_page(filters, json_output=output_json)


@hooks_app.command("create")
def hooks_create(
    event_type: str = typer.Option(..., "--event-type", help="Event type, e.g. PAYIN_NORMAL_SUCCEEDED."),
    url: str = typer.Option(..., "--url", help="Callback URL."),
    tag: str | None = typer.Option(None, "--tag", help="Optional custom tag."),
    idempotency_key: str | None = typer.Option(
        None, "--idempotency-key", help="Idempotency key for safe replays."
    ),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
) -> None:
    """Register a webhook for an event type."""

    payload: dict[str, Any] = {"EventType": event_type, "Url": url}
    if tag:
        payload["Tag"] = tag
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            hook = client.hooks.create(payload, idempotency_key=idempotency_key)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _echo_json(hook)


@events_app.command("list")
def events_list(
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
    page: int | None = _SHARED_OPTIONS["page"],
    per_page: int | None = _SHARED_OPTIONS["per_page"],
    event_type: str | None = typer.Option(None, "--event-type", help="Filter by event type."),
    output_json: bool = _SHARED_OPTIONS["output_json"],
) -> None:
    """List events from the account event log."""

    filters = _page_filters(page, per_page, EventType=event_type)
    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            events = client.events.list(filters)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _present_output(events, view_id="events.list", json_output=output_json)
    _present_page(filters, json_output=output_json)


@responses_app.command("get")
def responses_get(
    idempotency_key: str = typer.Argument(..., help="Idempotency key of the original request."),
    client_id: str = _SHARED_OPTIONS["client_id"],
    passphrase: str = _SHARED_OPTIONS["passphrase"],
    preproduction: bool = _SHARED_OPTIONS["preproduction"],
    root_url: str | None = _SHARED_OPTIONS["root_url"],
    temp_dir: Path | None = _SHARED_OPTIONS["temp_dir"],
    timeout: float | None = _SHARED_OPTIONS["timeout"],
) -> None:
    """Fetch the response recorded for an idempotency key."""

    with _build_client(client_id, passphrase, preproduction, root_url, temp_dir, timeout) as client:
        try:
            response = client.fetch_response(idempotency_key)
        except MangoPayError as exc:
            _handle_error(exc)
            return

    _echo_json(response)


def main() -> None:  # pragma: no cover - console entrypoint
    app()
