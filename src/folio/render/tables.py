"""Tech comparison tables.

A ``techtable`` block is authored as YAML inside a fenced code block::

    ```techtable
    columns: [Model, Accuracy, Speed]
    widths: ["40%", "30%", "30%"]
    rows:
      - label: ResNet-50
        values: ["92%", "10ms"]
    ```

Three layouts are supported:

* **explicit**: ``columns`` is given; each row contributes ``[label, *values]``.
* **auto**: columns are the union of the rows' ``cells`` keys in first-seen
  order (a row's ``values`` become a *Values* column), plus a trailing
  *Details* column when any row has ``details``.
* **simple**: no cell keys at all; a two-column ``Label | Details`` table.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from folio.render.theme import Palette, Theme, palette_for

Alignment = Literal["left", "center", "right"]

DETAILS_KEY = "details"
VALUES_KEY = "values"
DETAILS_HEADER = "Details"
DEFAULT_WIDEN_FACTOR = 1.1
MIN_COLUMNS_FOR_WIDENING = 5

# Keys that describe the row itself rather than a data column.
_RESERVED_ROW_KEYS = frozenset({"label", "category", "children", "values", "cells", "details", "align"})
_ALIGN_PREFIX = re.compile(r"^align([A-Z].*)$")
_PERCENT = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%\s*$")


class TableMode(str, Enum):
    EXPLICIT = "explicit"
    AUTO = "auto"
    SIMPLE = "simple"


def _stringify(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class TechRow(BaseModel):
    """One table row.

    Unknown keys are folded into ``cells`` (keeping their order) and
    ``align<Key>`` keys into ``align``, so rows can be written either as
    ``{label: A, cells: {dataset: X}}`` or as ``{label: A, dataset: X}``.
    """

    model_config = ConfigDict(frozen=True)

    label: str | None = None
    category: str | None = None
    values: list[str] | None = None
    cells: dict[str, str] = Field(default_factory=dict)
    details: str | None = None
    align: dict[str, Alignment] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def _fold_free_form_keys(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data
        folded: dict[str, Any] = {}
        cells: dict[str, Any] = dict(data.get("cells") or {})
        align: dict[str, Any] = dict(data.get("align") or {})
        for key, value in data.items():
            if key in _RESERVED_ROW_KEYS:
                folded[key] = value
                continue
            match = _ALIGN_PREFIX.match(key)
            if match:
                suffix = match.group(1)
                align[suffix[:1].lower() + suffix[1:]] = value
            else:
                cells[key] = value
        folded["cells"] = cells
        folded["align"] = align
        if folded.get("details") is None and folded.get("children") is not None:
            folded["details"] = folded["children"]
        folded.pop("children", None)
        return folded

    @field_validator("label", "category", "details", mode="before")
    @classmethod
    def _scalar_to_str(cls, value: Any) -> Any:
        return None if value is None else _stringify(value)

    @field_validator("values", mode="before")
    @classmethod
    def _values_to_str(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, (str, int, float)):
            value = [value]
        return [_stringify(v) for v in value]

    @field_validator("cells", mode="before")
    @classmethod
    def _cells_to_str(cls, value: Any) -> Any:
        if isinstance(value, Mapping):
            return {str(k): _stringify(v) for k, v in value.items()}
        return value

    @property
    def auto_cells(self) -> dict[str, str]:
        """Cells for the auto layout.

        Without table-level ``columns`` there is nothing to pair ``values``
        with, so they are joined into a column of their own.
        """
        if not self.values or VALUES_KEY in self.cells:
            return self.cells
        return {**self.cells, VALUES_KEY: ", ".join(self.values)}

    @property
    def left_text(self) -> str:
        return self.label or self.category or ""

    def alignment(self, key: str, default: Alignment) -> Alignment:
        return self.align.get(key, default)

    def label_alignment(self) -> Alignment:
        return self.align.get("label") or self.align.get("category") or "center"


class TechTable(BaseModel):
    """Parsed ``techtable`` block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    rows: list[TechRow] = Field(default_factory=list)
    columns: list[str] | None = None
    widths: list[str | int | float] | None = None
    left_header: str = Field(default="Label", alias="leftHeader")
    hide_header: bool = Field(default=False, alias="hideHeader")

    @field_validator("columns", mode="before")
    @classmethod
    def _columns_to_str(cls, value: Any) -> Any:
        if value is None:
            return None
        return [_stringify(v) for v in value]

    @property
    def is_explicit(self) -> bool:
        return bool(self.columns)


@dataclass(frozen=True, slots=True)
class HeaderCell:
    text: str
    align: Alignment


@dataclass(frozen=True, slots=True)
class BodyCell:
    html: str
    align: Alignment
    is_label: bool = False


@dataclass(frozen=True, slots=True)
class TableView:
    """Render tree for one table."""

    mode: TableMode
    headers: list[HeaderCell]
    rows: list[list[BodyCell]]
    palette: Palette
    hide_header: bool = False
    widths: list[float] | None = None
    column_keys: list[str] = field(default_factory=list)

    @property
    def header_texts(self) -> list[str]:
        return [h.text for h in self.headers]


def format_header(key: str) -> str:
    """Turn a cell key into a column header.

    ``fid`` is the Fréchet Inception Distance, where lower is better.

    >>> format_header("trainingTime")
    'Training Time'
    >>> format_header("FID")
    'FID ↓'
    """
    if key.lower() == "fid":
        return "FID ↓"
    spaced = re.sub(r"(?<=.)([A-Z])", r" \1", key)
    return spaced[:1].upper() + spaced[1:]


def detect_columns(rows: Sequence[TechRow]) -> tuple[list[str], bool]:
    """Return the auto-detected column keys and whether a Details column is needed."""
    keys: dict[str, None] = {}
    has_details = False
    for row in rows:
        for key in row.auto_cells:
            keys.setdefault(key, None)
        if row.details is not None:
            has_details = True
    return list(keys), has_details


def _parse_width(value: str | int | float) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    match = _PERCENT.match(value)
    if match:
        return float(match.group(1))
    try:
        return float(value)
    except ValueError:
        return None


def distribute_column_widths(
    count: int,
    widths: Sequence[str | int | float] | None = None,
    *,
    widen_center: bool = False,
    factor: float = DEFAULT_WIDEN_FACTOR,
) -> list[float]:
    """Return column widths in percent, summing to 100.

    ``widths`` is used as the base distribution when it has one entry per
    column and every entry is a percentage (or a bare number); otherwise each
    column gets an equal share. With ``widen_center`` and at least five
    columns, the three central columns are scaled by ``factor`` before the
    whole set is renormalised.
    """
    if count <= 0:
        return []

    base: list[float] | None = None
    if widths is not None and len(widths) == count:
        parsed = [_parse_width(w) for w in widths]
        if all(p is not None and p > 0 for p in parsed):
            base = [p for p in parsed if p is not None]
    if base is None:
        base = [100.0 / count] * count

    if widen_center and count >= MIN_COLUMNS_FOR_WIDENING:
        start = (count - 3) // 2
        for i in range(start, start + 3):
            base[i] *= factor

    total = sum(base)
    return [w * 100.0 / total for w in base]


def build_table(
    spec: TechTable,
    *,
    theme: Theme | str = Theme.DARK,
    wide: bool = False,
    widen_factor: float = DEFAULT_WIDEN_FACTOR,
    render_cell: Callable[[str], str] | None = None,
) -> TableView | None:
    """Build the render tree for ``spec``.

    Returns ``None`` when there are no rows to show. ``render_cell`` turns cell
    source text into HTML (inline Markdown when called from the renderer).
    """
    if not spec.rows:
        return None

    cell = render_cell or (lambda text: text)
    palette = palette_for(theme)

    if spec.is_explicit:
        columns = list(spec.columns or [])
        headers = [HeaderCell(text, "center" if i == 0 else "left") for i, text in enumerate(columns)]
        rows: list[list[BodyCell]] = []
        for row in spec.rows:
            values = row.values or []
            body = [BodyCell(cell(row.left_text), row.label_alignment(), is_label=True)]
            for i in range(len(columns) - 1):
                body.append(BodyCell(cell(values[i]) if i < len(values) else "", "left"))
            rows.append(body)
        widths = distribute_column_widths(
            len(columns), spec.widths, widen_center=wide, factor=widen_factor
        )
        return TableView(
            mode=TableMode.EXPLICIT,
            headers=headers,
            rows=rows,
            palette=palette,
            hide_header=spec.hide_header,
            widths=widths,
            column_keys=columns,
        )

    keys, has_details = detect_columns(spec.rows)
    if not keys:
        headers = [HeaderCell(spec.left_header, "center"), HeaderCell(DETAILS_HEADER, "left")]
        rows = [
            [
                BodyCell(cell(row.left_text), row.label_alignment(), is_label=True),
                BodyCell(cell(row.details or ""), row.alignment(DETAILS_KEY, "left")),
            ]
            for row in spec.rows
        ]
        return TableView(
            mode=TableMode.SIMPLE,
            headers=headers,
            rows=rows,
            palette=palette,
            hide_header=spec.hide_header,
            column_keys=[DETAILS_KEY],
        )

    headers = [HeaderCell(spec.left_header, "center")]
    headers.extend(HeaderCell(format_header(key), "left") for key in keys)
    if has_details:
        headers.append(HeaderCell(DETAILS_HEADER, "left"))

    rows = []
    for row in spec.rows:
        body = [BodyCell(cell(row.left_text), row.label_alignment(), is_label=True)]
        body.extend(BodyCell(cell(row.auto_cells.get(key, "")), row.alignment(key, "left")) for key in keys)
        if has_details:
            body.append(BodyCell(cell(row.details or ""), row.alignment(DETAILS_KEY, "left")))
        rows.append(body)

    return TableView(
        mode=TableMode.AUTO,
        headers=headers,
        rows=rows,
        palette=palette,
        hide_header=spec.hide_header,
        column_keys=[*keys, DETAILS_KEY] if has_details else keys,
    )
