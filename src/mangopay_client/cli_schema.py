"""Schema describing important fields for CLI table rendering."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

Row = Mapping[str, Any]
ValueExtractor = Callable[[Row], Any]
ValueFormatter = Callable[[Any], str]
SortKey = Callable[[Row], Any]


@dataclass(frozen=True)
class Column:
    """Describe how to pull and format a column for Rich tables."""

    header: str
    keys: tuple[str, ...] = ()
    extractor: ValueExtractor | None = None
    formatter: ValueFormatter | None = None
    justify: str = "left"

    def render(self, row: Row) -> str:
        value: Any | None = None
        for key in self.keys:
            value = _dig(row, key)
            if value is not None:
                break
        if value is None and self.extractor:
            value = self.extractor(row)
        if value is None:
            return ""
        if self.formatter:
            formatted = self.formatter(value)
            return "" if formatted is None else str(formatted)
        return str(value)


@dataclass(frozen=True)
class TableView:
    """Describe a Rich table for a CLI command."""

    title: str
    columns: tuple[Column, ...]
    sort_key: SortKey | None = None


def _dig(row: Row, dotted: str) -> Any:
    value: Any = row
    for part in dotted.split("."):
        if not isinstance(value, Mapping):
            return None
        value = value.get(part)
    return value


def _timestamp_formatter(value: Any) -> str:
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")
    except (TypeError, ValueError, OverflowError):
        return str(value)


def _amount_formatter(value: Any) -> str:
    """Money values arrive in minor units (cents)."""
    if isinstance(value, (int, float)):
        return f"{value / 100:.2f}"
    return str(value)


def _user_name(row: Row) -> str:
    if row.get("PersonType") == "LEGAL":
        return row.get("Name") or ""
    parts = (row.get("FirstName"), row.get("LastName"))
    return " ".join(part for part in parts if part)


CLI_TABLE_VIEWS: dict[str, TableView] = {
    "users.list": TableView(
        title="Users",
        columns=(
            Column("Id", keys=("Id",)),
            Column("Type", keys=("PersonType",)),
            Column("Name", extractor=_user_name),
            Column("Email", keys=("Email",)),
            Column("Created", keys=("CreationDate",), formatter=_timestamp_formatter),
        ),
    ),
    "wallets.list": TableView(
        title="Wallets",
        columns=(
            Column("Id", keys=("Id",)),
            Column("Description", keys=("Description",)),
            Column("Currency", keys=("Currency", "Balance.Currency")),
            Column("Balance", keys=("Balance.Amount",), formatter=_amount_formatter, justify="right"),
        ),
    ),
    "transactions.list": TableView(
        title="Transactions",
        columns=(
            Column("Id", keys=("Id",)),
            Column("Type", keys=("Type",)),
            Column("Nature", keys=("Nature",)),
            Column("Status", keys=("Status",)),
            Column(
                "Amount",
                keys=("DebitedFunds.Amount",),
                formatter=_amount_formatter,
                justify="right",
            ),
            Column("Currency", keys=("DebitedFunds.Currency",)),
            Column("Created", keys=("CreationDate",), formatter=_timestamp_formatter),
        ),
        sort_key=lambda row: row.get("CreationDate") or 0,
    ),
    "hooks.list": TableView(
        title="Hooks",
        columns=(
            Column("Id", keys=("Id",)),
            Column("Event", keys=("EventType",)),
            Column("Url", keys=("Url",)),
            Column("Status", keys=("Status",)),
            Column("Validity", keys=("Validity",)),
        ),
        sort_key=lambda row: str(row.get("EventType") or ""),
    ),
    "events.list": TableView(
        title="Events",
        columns=(
            Column("Resource", keys=("ResourceId",)),
            Column("Event", keys=("EventType",)),
            Column("Date", keys=("Date",), formatter=_timestamp_formatter),
        ),
        sort_key=lambda row: row.get("Date") or 0,
    ),
}
