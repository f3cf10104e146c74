"""Tests for board models — upstream deserialization and report aliases."""

import pytest

from boardcheck.models.board import (
    Board,
    Diagnosis,
    DiagnosticReport,
    ItemStatusValue,
    parse_board,
)
from boardcheck.services.errors import MalformedUpstreamResponse


def _column(col_id: str, title: str, col_type: str = "text") -> dict:
    return {"id": col_id, "title": title, "type": col_type, "settings_str": None}


def _item(item_id: str, name: str) -> dict:
    return {"id": item_id, "name": name, "column_values": []}


def _board_data(columns: list[dict]) -> dict:
    return {
        "boards": [{"name": "Deals", "columns": columns, "items_page": {"items": []}}]
    }


class TestBoard:
    def test_flattens_items_page(self):
        board = Board.model_validate(
            {
                "name": "Deals",
                "columns": [],
                "items_page": {"items": [_item("1", "Acme")]},
            }
        )
        assert [item.name for item in board.items] == ["Acme"]

    def test_null_items_page_gives_no_items(self):
        board = Board.model_validate({"name": "Deals", "items_page": None})
        assert board.items == []
        assert board.columns == []

    def test_optional_column_fields(self):
        board = Board.model_validate(
            {
                "name": "Deals",
                "columns": [{"id": "name", "title": "Name", "type": "name"}],
                "items_page": {
                    "items": [
                        {"id": "1", "name": "A", "column_values": [{"id": "name"}]}
                    ]
                },
            }
        )
        assert board.columns[0].settings_str is None
        assert board.items[0].column_values[0].text is None

    def test_column_value_title_read_from_column(self):
        board = Board.model_validate(
            {
                "name": "Deals",
                "items_page": {
                    "items": [
                        {
                            "id": "1",
                            "name": "A",
                            "column_values": [
                                {
                                    "id": "color_x",
                                    "text": "New",
                                    "column": {"title": "Deal Stage"},
                                }
                            ],
                        }
                    ]
                },
            }
        )
        value = board.items[0].column_values[0]
        assert value.title == "Deal Stage"
        assert value.text == "New"


class TestParseBoard:
    def test_returns_first_board(self):
        data = _board_data([_column("status", "Status", "color")])
        data["boards"].append({"name": "Other", "columns": []})
        board = parse_board(data, "123")
        assert board.name == "Deals"
        assert board.columns[0].id == "status"

    def test_zero_boards_raises(self):
        with pytest.raises(MalformedUpstreamResponse, match="Board 123 not found"):
            parse_board({"boards": []}, "123")

    def test_missing_boards_key_raises(self):
        with pytest.raises(MalformedUpstreamResponse):
            parse_board({}, "123")

    def test_wrong_shape_raises(self):
        with pytest.raises(MalformedUpstreamResponse, match="Unexpected board shape"):
            parse_board({"boards": [{"columns": "nope"}]}, "123")


class TestDiagnosticReport:
    def test_serializes_with_upper_case_keys(self):
        report = DiagnosticReport(
            board_name="Deals",
            board_id="123",
            status_columns_found=[],
            current_config_says="deal_stage",
            webhook_tries_to_use="color_mktrw6k3",
            current_status_values_in_items=[
                ItemStatusValue(item_name="Acme", status_value="No status")
            ],
            all_columns=[],
            diagnosis=Diagnosis(
                problem="Webhook uses wrong column ID",
                currently_using="color_mktrw6k3",
                should_use="NOT_FOUND",
                status_column_exists=False,
            ),
        )
        body = report.to_response()
        assert body["SUCCESS"] is True
        assert body["BOARD_NAME"] == "Deals"
        assert body["BOARD_ID"] == "123"
        assert body["CURRENT_STATUS_VALUES_IN_ITEMS"] == [
            {"itemName": "Acme", "statusValue": "No status"}
        ]
        assert body["DIAGNOSIS"] == {
            "problem": "Webhook uses wrong column ID",
            "currentlyUsing": "color_mktrw6k3",
            "shouldUse": "NOT_FOUND",
            "statusColumnExists": False,
        }
