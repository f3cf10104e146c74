"""Deals board column check.

Fetches the deals board's columns plus a few sample items and works out
which status column the stage webhook should be reading, compared with
the column ids currently configured.
"""

import json
import logging
from typing import Any

from boardcheck.config import get_settings
from boardcheck.models.board import (
    Board,
    Column,
    ColumnSummary,
    Diagnosis,
    DiagnosticReport,
    ItemStatusValue,
    StatusColumnInfo,
    parse_board,
)
from boardcheck.services import monday
from boardcheck.services.errors import MondayConfigError

logger = logging.getLogger(__name__)

STATUS_COLUMN_TYPE = "color"
STAGE_TITLE_HINT = "stage"
NO_STATUS = "No status"
NOT_FOUND = "NOT_FOUND"
UNPARSABLE_OPTIONS = {"error": "Could not parse"}
PROBLEM = "Webhook uses wrong column ID"

_BOARD_COLUMNS_QUERY = """
query($boardId: [ID!], $limit: Int!) {
  boards(ids: $boardId) {
    name
    columns {
      id
      title
      type
      settings_str
    }
    items_page(limit: $limit) {
      items {
        id
        name
        column_values {
          id
          text
          column {
            title
          }
        }
      }
    }
  }
}
"""


def is_status_column(column: Column) -> bool:
    """Status columns are color columns, or anything titled like a stage."""
    return (
        column.type == STATUS_COLUMN_TYPE
        or STAGE_TITLE_HINT in column.title.lower()
    )


def parse_status_options(column: Column) -> dict[str, Any] | list[Any]:
    """Return the label mapping from a column's settings payload.

    Status columns map label index to name; dropdown columns keep their
    labels as a list of {id, name} entries, which is passed through as is.
    Invalid JSON or a JSON null yields the "Could not parse" sentinel
    instead of raising; any other non-object payload has no labels.
    """
    if not column.settings_str:
        return {}
    try:
        settings = json.loads(column.settings_str)
    except ValueError:
        settings = None
    if settings is None:
        logger.warning("Could not parse settings_str for column %s", column.id)
        return dict(UNPARSABLE_OPTIONS)
    if not isinstance(settings, dict):
        return {}
    return settings.get("labels") or {}


def item_status_values(
    board: Board, status_columns: list[Column]
) -> list[ItemStatusValue]:
    """Status text of each sampled item, read from the first status column."""
    status_id = status_columns[0].id if status_columns else None
    values = []
    for item in board.items:
        match = next(
            (cv for cv in item.column_values if cv.id == status_id), None
        )
        text = match.text if match else None
        values.append(
            ItemStatusValue(item_name=item.name, status_value=text or NO_STATUS)
        )
    return values


def build_report(
    board: Board,
    board_id: str,
    current_column_id: str,
    webhook_column_id: str,
) -> DiagnosticReport:
    """Assemble the diagnostic report for a fetched board."""
    status_columns = [col for col in board.columns if is_status_column(col)]
    status_info = [
        StatusColumnInfo(
            id=col.id, title=col.title, options=parse_status_options(col)
        )
        for col in status_columns
    ]

    return DiagnosticReport(
        board_name=board.name,
        board_id=board_id,
        status_columns_found=status_info,
        current_config_says=current_column_id,
        webhook_tries_to_use=webhook_column_id,
        current_status_values_in_items=item_status_values(board, status_columns),
        all_columns=[
            ColumnSummary(id=col.id, title=col.title, type=col.type)
            for col in board.columns
        ],
        diagnosis=Diagnosis(
            problem=PROBLEM,
            currently_using=webhook_column_id,
            should_use=status_info[0].id if status_info else NOT_FOUND,
            status_column_exists=bool(status_info),
        ),
    )


async def fetch_board(board_id: str, limit: int) -> Board:
    """Fetch board columns and the first ``limit`` items."""
    data = await monday.execute(
        _BOARD_COLUMNS_QUERY, {"boardId": [board_id], "limit": limit}
    )
    return parse_board(data, board_id)


async def run_column_check() -> DiagnosticReport:
    """Fetch the configured deals board and diagnose its status columns."""
    settings = get_settings()
    board_id = settings.monday_deals_board_id
    if not board_id:
        raise MondayConfigError("MONDAY_DEALS_BOARD_ID is not configured")

    board = await fetch_board(board_id, settings.sample_item_limit)
    report = build_report(
        board,
        board_id,
        settings.current_stage_column_id,
        settings.webhook_stage_column_id,
    )
    logger.info(
        "Column check for board %s (%s): %d status columns, should use %s",
        board_id,
        board.name,
        len(report.status_columns_found),
        report.diagnosis.should_use,
    )
    return report
