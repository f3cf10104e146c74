"""Monday board models — typed view of the upstream GraphQL shape."""

from typing import Any

from pydantic import BaseModel, Field, ValidationError, model_validator

from boardcheck.services.errors import MalformedUpstreamResponse


class Column(BaseModel):
    """A typed field definition on a board."""

    id: str
    title: str
    type: str
    settings_str: str | None = None


class ColumnValue(BaseModel):
    """Rendered value of one column for one item."""

    id: str
    title: str | None = None
    text: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _title_from_column(cls, data: Any) -> Any:
        # Newer API versions only expose the title as column { title }
        if isinstance(data, dict) and "title" not in data and data.get("column"):
            data = {**data, "title": data["column"].get("title")}
        return data


class Item(BaseModel):
    """A single row on a board."""

    id: str
    name: str
    column_values: list[ColumnValue] = []


class Board(BaseModel):
    """Board name, columns and the sampled items."""

    name: str
    columns: list[Column] = []
    items: list[Item] = []

    @model_validator(mode="before")
    @classmethod
    def _flatten_items_page(cls, data: Any) -> Any:
        # Upstream nests items under items_page { items }
        if isinstance(data, dict) and "items_page" in data:
            data = dict(data)
            page = data.pop("items_page") or {}
            data["items"] = page.get("items") or []
        return data


def parse_board(data: dict[str, Any], board_id: str) -> Board:
    """Pull the first board out of a ``boards`` query result.

    Raises MalformedUpstreamResponse when no board is returned or the
    board does not match the expected shape.
    """
    boards = data.get("boards") if isinstance(data, dict) else None
    if not boards:
        raise MalformedUpstreamResponse(f"Board {board_id} not found in response")
    try:
        return Board.model_validate(boards[0])
    except ValidationError as e:
        raise MalformedUpstreamResponse(
            f"Unexpected board shape for {board_id}: {e.error_count()} errors"
        ) from e


# --- Diagnostic report ---


class StatusColumnInfo(BaseModel):
    """A status column and its label options."""

    id: str
    title: str
    options: dict[str, Any] | list[Any] = {}


class ItemStatusValue(BaseModel):
    item_name: str = Field(serialization_alias="itemName")
    status_value: str = Field(serialization_alias="statusValue")


class ColumnSummary(BaseModel):
    id: str
    title: str
    type: str


class Diagnosis(BaseModel):
    problem: str
    currently_using: str = Field(serialization_alias="currentlyUsing")
    should_use: str = Field(serialization_alias="shouldUse")
    status_column_exists: bool = Field(serialization_alias="statusColumnExists")


class DiagnosticReport(BaseModel):
    """Column check result, serialized with upper-case keys."""

    success: bool = Field(True, serialization_alias="SUCCESS")
    board_name: str = Field(serialization_alias="BOARD_NAME")
    board_id: str = Field(serialization_alias="BOARD_ID")
    status_columns_found: list[StatusColumnInfo] = Field(
        serialization_alias="STATUS_COLUMNS_FOUND"
    )
    current_config_says: str = Field(serialization_alias="CURRENT_CONFIG_SAYS")
    webhook_tries_to_use: str = Field(serialization_alias="WEBHOOK_TRIES_TO_USE")
    current_status_values_in_items: list[ItemStatusValue] = Field(
        serialization_alias="CURRENT_STATUS_VALUES_IN_ITEMS"
    )
    all_columns: list[ColumnSummary] = Field(serialization_alias="ALL_COLUMNS")
    diagnosis: Diagnosis = Field(serialization_alias="DIAGNOSIS")

    def to_response(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)
