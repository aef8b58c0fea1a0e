"""SVG rendering of cutting plans.

Each material is drawn as a row of sheets side by side. Pieces are
labelled with their id and nominal dimensions; offcuts are drawn dashed.
Coordinates are millimetres scaled by ``scale`` pixels per mm.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from cutplan.domain.value_objects import GrainDirection, Offcut, Placement
from cutplan.infrastructure.metrics_reporter import CuttingReport, MaterialSheetsReport


class CutDiagramRenderer:
    """Renders cutting plans as SVG.

    Attributes:
        scale: Pixels per millimetre (default 0.4).
        margin: Outer margin in pixels.
        spacing: Horizontal gap between sheets in pixels.
        title_height: Height reserved for a material's title row.
        footer_height: Height reserved under the sheets for sheet numbers.
        sheet_fill: Fill color of the sheet background.
        piece_fill: Fill color of placed pieces.
        piece_stroke: Stroke color of piece outlines.
        offcut_fill: Fill color of offcuts.
        offcut_stroke: Stroke color of offcuts.
        text_color: Color of labels.
        show_labels: Whether to draw piece ids.
        show_dimensions: Whether to draw piece dimensions.
        show_grain: Whether to draw the sheet grain direction.
    """

    def __init__(
        self,
        scale: float = 0.4,
        margin: float = 20.0,
        spacing: float = 30.0,
        sheet_fill: str = "#f0f0f0",
        piece_fill: str = "#a0c4ff",
        piece_stroke: str = "#004494",
        offcut_fill: str = "#ffcccc",
        offcut_stroke: str = "#cc0000",
        text_color: str = "#333333",
        show_labels: bool = True,
        show_dimensions: bool = False,
        show_grain: bool = True,
    ) -> None:
        self.scale = scale
        self.margin = margin
        self.spacing = spacing
        self.title_height = 20.0
        self.footer_height = 20.0
        self.sheet_fill = sheet_fill
        self.piece_fill = piece_fill
        self.piece_stroke = piece_stroke
        self.offcut_fill = offcut_fill
        self.offcut_stroke = offcut_stroke
        self.text_color = text_color
        self.show_labels = show_labels
        self.show_dimensions = show_dimensions
        self.show_grain = show_grain

    def render_report(self, report: CuttingReport) -> str:
        """Render every material of a report into one SVG, one row per material."""
        rows: list[str] = []
        width = 0.0
        y = 0.0

        for material in report.materials.values():
            row_width, row_height = self._row_size(material)
            rows.append(self._render_row(material, y, report.project_id))
            width = max(width, row_width)
            y += row_height

        return self._document(rows, width or self.margin * 2, y or self.margin * 2)

    def render_material(
        self, material: MaterialSheetsReport, project_id: str | None = None
    ) -> str:
        """Render one material's sheets side by side."""
        width, height = self._row_size(material)
        return self._document([self._render_row(material, 0.0, project_id)], width, height)

    def _document(self, rows: list[str], width: float, height: float) -> str:
        parts = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<svg width="{width}" height="{height}" xmlns="http://www.w3.org/2000/svg">',
            "  <style>",
            f"    .sheet {{ fill: {self.sheet_fill}; stroke: #333; stroke-width: 2; }}",
            f"    .piece {{ fill: {self.piece_fill}; stroke: {self.piece_stroke}; stroke-width: 1; }}",
            f"    .offcut {{ fill: {self.offcut_fill}; stroke: {self.offcut_stroke}; "
            "stroke-width: 1; stroke-dasharray: 5,5; }",
            f"    .label {{ font-family: Arial, sans-serif; font-size: 10px; fill: {self.text_color}; }}",
            f"    .title {{ font-family: Arial, sans-serif; font-size: 14px; "
            f"font-weight: bold; fill: {self.text_color}; }}",
            "  </style>",
        ]
        parts.extend(rows)
        parts.append("</svg>")
        return "\n".join(parts)

    def _row_size(self, material: MaterialSheetsReport) -> tuple[float, float]:
        sheet_w = material.sheet_mm[0] * self.scale
        sheet_h = material.sheet_mm[1] * self.scale
        count = max(material.sheets_used, 1)
        width = count * (sheet_w + self.spacing) - self.spacing + self.margin * 2
        height = self.title_height + sheet_h + self.footer_height + self.margin
        return width, height

    def _render_row(
        self, material: MaterialSheetsReport, top: float, project_id: str | None
    ) -> str:
        sheet_w = material.sheet_mm[0] * self.scale
        sheet_h = material.sheet_mm[1] * self.scale
        row_width, _ = self._row_size(material)

        title = f"Cut Layout - {material.material_id}"
        if project_id:
            title = f"Cut Layout - {project_id} - {material.material_id}"
        parts = [
            f"  <!-- Material {escape(material.material_id)} -->",
            f'  <text x="{row_width / 2}" y="{top + 15}" class="title" '
            f'text-anchor="middle">{escape(title)}</text>',
        ]

        offset_y = top + self.title_height
        for index in range(1, material.sheets_used + 1):
            offset_x = self.margin + (index - 1) * (sheet_w + self.spacing)
            parts.append(
                f'  <rect x="{offset_x}" y="{offset_y}" width="{sheet_w}" '
                f'height="{sheet_h}" class="sheet"/>'
            )

            for placement in material.placements:
                if placement.sheet_index == index:
                    parts.append(self._render_piece(placement, offset_x, offset_y))

            for offcut in material.offcuts:
                if offcut.sheet_index == index:
                    parts.append(self._render_offcut(offcut, offset_x, offset_y))

            if self.show_grain and material.grain != GrainDirection.NONE:
                parts.append(
                    self._render_grain(material.grain, offset_x, offset_y, sheet_w, sheet_h)
                )

            parts.append(
                f'  <text x="{offset_x + sheet_w / 2}" y="{offset_y + sheet_h + 15}" '
                f'class="label" text-anchor="middle">Sheet {index}</text>'
            )

        return "\n".join(parts)

    def _render_piece(self, placement: Placement, offset_x: float, offset_y: float) -> str:
        x = offset_x + placement.x * self.scale
        y = offset_y + placement.y * self.scale
        w = placement.placed_width * self.scale
        h = placement.placed_height * self.scale

        parts = [f'  <rect x="{x}" y="{y}" width="{w}" height="{h}" class="piece"/>']

        label_parts: list[str] = []
        if self.show_labels:
            label_parts.append(escape(placement.piece_id))
        if self.show_dimensions:
            dims = f"{placement.width}x{placement.height}"
            if placement.rotated:
                dims += " (R)"
            label_parts.append(dims)

        if label_parts:
            parts.append(
                f'  <text x="{x + w / 2}" y="{y + h / 2}" class="label" '
                f'text-anchor="middle" dominant-baseline="middle">'
                f'{" ".join(label_parts)}</text>'
            )
        return "\n".join(parts)

    def _render_offcut(self, offcut: Offcut, offset_x: float, offset_y: float) -> str:
        return (
            f'  <rect x="{offset_x + offcut.x * self.scale}" '
            f'y="{offset_y + offcut.y * self.scale}" '
            f'width="{offcut.width * self.scale}" height="{offcut.height * self.scale}" '
            f'class="offcut"/>'
        )

    def _render_grain(
        self,
        grain: GrainDirection,
        offset_x: float,
        offset_y: float,
        sheet_w: float,
        sheet_h: float,
    ) -> str:
        """Arrow in the sheet's top-right corner along the grain."""
        length = min(40.0, sheet_w / 4, sheet_h / 4)
        x = offset_x + sheet_w - 10
        y = offset_y + 10
        if grain == GrainDirection.LENGTH:
            x1, y1, x2, y2 = x, y, x, y + length
        else:
            x1, y1, x2, y2 = x - length, y, x, y
        return (
            f'  <line x1="{x1}" y1="{y1}" x2="{x2}" y2="{y2}" '
            f'stroke="{self.text_color}" stroke-width="1.5"/>\n'
            f'  <circle cx="{x2}" cy="{y2}" r="2" fill="{self.text_color}"/>'
        )
