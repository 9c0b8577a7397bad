"""Tests for folio.render.tables."""

from __future__ import annotations

import pytest

from folio.render.tables import (
    TableMode,
    TechRow,
    TechTable,
    build_table,
    detect_columns,
    distribute_column_widths,
    format_header,
)
from folio.render.theme import Theme, palette_for


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("fid", "FID ↓"),
        ("FID", "FID ↓"),
        ("dataset", "Dataset"),
        ("trainingTime", "Training Time"),
        ("numGPUs", "Num G P Us"),
    ],
)
def test_format_header(key, expected):
    assert format_header(key) == expected


def test_widths_sum_to_100_for_any_count():
    for count in range(1, 12):
        for widen in (False, True):
            widths = distribute_column_widths(count, widen_center=widen, factor=1.3)
            assert sum(widths) == pytest.approx(100.0)


def test_center_widening_scales_the_three_middle_columns():
    widths = distribute_column_widths(5, widen_center=True, factor=1.1)

    # Equal base of 20 each; columns 1..3 scaled by 1.1 then renormalized.
    total = 2 * 20 + 3 * 22
    assert widths[0] == pytest.approx(20 * 100 / total)
    assert widths[1] == pytest.approx(22 * 100 / total)
    assert widths[1] == widths[2] == widths[3]
    assert widths[0] == widths[4]


def test_explicit_widths_are_widened_then_renormalised():
    widths = distribute_column_widths(5, ["10%", "20%", "30%", "20%", "20%"], widen_center=True, factor=1.1)

    # Columns 1..3 become 22, 33, 22; the total is 107.
    expected = [v * 100 / 107 for v in (10, 22, 33, 22, 20)]
    assert widths == pytest.approx(expected)
    assert sum(widths) == pytest.approx(100.0)


def test_widening_needs_at_least_five_columns():
    assert distribute_column_widths(4, widen_center=True) == pytest.approx([25.0] * 4)


def test_explicit_widths_are_used_as_base():
    assert distribute_column_widths(3, ["50%", "25%", 25]) == pytest.approx([50.0, 25.0, 25.0])


@pytest.mark.parametrize("widths", [["50%", "50%"], ["50%", "wide", "25%"], ["0%", "50%", "50%"]])
def test_invalid_explicit_widths_fall_back_to_equal_shares(widths):
    assert distribute_column_widths(3, widths) == pytest.approx([100 / 3] * 3)


def test_explicit_mode_pairs_values_with_columns_after_the_label():
    spec = TechTable.model_validate(
        {
            "columns": ["Model", "Accuracy", "Speed"],
            "rows": [{"label": "ResNet", "values": ["92%", "10ms"]}, {"label": "ViT", "values": ["95%"]}],
        }
    )

    view = build_table(spec)

    assert view.mode is TableMode.EXPLICIT
    assert view.header_texts == ["Model", "Accuracy", "Speed"]
    assert [cell.html for cell in view.rows[0]] == ["ResNet", "92%", "10ms"]
    # Missing trailing values render as empty cells.
    assert [cell.html for cell in view.rows[1]] == ["ViT", "95%", ""]
    assert view.rows[0][0].is_label
    assert sum(view.widths) == pytest.approx(100.0)


def test_auto_mode_uses_union_of_keys_in_first_seen_order():
    rows = [
        TechRow.model_validate({"label": "A", "dataset": "X"}),
        TechRow.model_validate({"label": "B", "fid": 3.2, "dataset": "Y", "details": "note"}),
    ]

    keys, has_details = detect_columns(rows)
    view = build_table(TechTable(rows=rows))

    assert keys == ["dataset", "fid"]
    assert has_details
    assert view.mode is TableMode.AUTO
    assert view.header_texts == ["Label", "Dataset", "FID ↓", "Details"]
    assert [cell.html for cell in view.rows[0]] == ["A", "X", "", ""]
    assert [cell.html for cell in view.rows[1]] == ["B", "Y", "3.2", "note"]


def test_simple_mode_without_cell_keys():
    spec = TechTable.model_validate(
        {"leftHeader": "Stage", "rows": [{"category": "Train", "children": "GPU cluster"}]}
    )

    view = build_table(spec)

    assert view.mode is TableMode.SIMPLE
    assert view.header_texts == ["Stage", "Details"]
    assert [cell.html for cell in view.rows[0]] == ["Train", "GPU cluster"]


def test_alignment_overrides():
    row = TechRow.model_validate({"label": "A", "dataset": "X", "alignDataset": "right", "alignLabel": "left"})

    view = build_table(TechTable(rows=[row]))

    assert row.cells == {"dataset": "X"}
    assert view.rows[0][0].align == "left"
    assert view.rows[0][1].align == "right"
    assert view.headers[0].align == "center"


def test_label_alignment_defaults_to_center():
    assert TechRow(label="A").label_alignment() == "center"


def test_no_rows_renders_nothing():
    assert build_table(TechTable()) is None


def test_render_cell_callback_is_applied():
    spec = TechTable(rows=[TechRow(label="A", details="**b**")])

    view = build_table(spec, render_cell=str.upper)

    assert [cell.html for cell in view.rows[0]] == ["A", "**B**"]


def test_theme_selects_palette():
    spec = TechTable(rows=[TechRow(label="A")])

    assert build_table(spec, theme=Theme.LIGHT).palette == palette_for(Theme.LIGHT)
    assert build_table(spec, theme="dark").palette == palette_for(Theme.DARK)


def test_values_without_columns_become_a_column():
    spec = TechTable.model_validate({"rows": [{"label": "A", "values": [1, "two"]}, {"label": "B", "dataset": "X"}]})

    view = build_table(spec)

    assert view.mode is TableMode.AUTO
    assert view.header_texts == ["Label", "Values", "Dataset"]
    assert [cell.html for cell in view.rows[0]] == ["A", "1, two", ""]
    assert [cell.html for cell in view.rows[1]] == ["B", "", "X"]
