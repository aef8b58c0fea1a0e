"""Plain-text formatters for console output."""

from __future__ import annotations

from cutplan.infrastructure.metrics_reporter import CuttingReport


class SummaryFormatter:
    """One summary line per material plus a total."""

    def format(self, report: CuttingReport) -> str:
        if not report.materials:
            return "No pieces to cut."

        lines = [
            f"Cut Optimizer: {m.sheets_used} sheets used | "
            f"waste {m.waste_pct * 100:.1f}% | material {material_id}"
            for material_id, m in report.materials.items()
        ]
        lines.append(
            f"Total: {report.total_pieces} pieces on {report.total_sheets} sheets"
        )
        return "\n".join(lines)


class CutListFormatter:
    """Formats the cut list as a fixed-width table."""

    def format(self, report: CuttingReport) -> str:
        if not report.cut_list:
            return "No pieces in cut list."

        lines = [
            "CUT LIST",
            "=" * 78,
            f"{'Piece':<16} {'Material':<12} {'Sheet':>5} {'X':>7} {'Y':>7} "
            f"{'W':>6} {'H':>6} {'Rot':>4} {'Band':>6}",
            "-" * 78,
        ]

        for p in report.cut_list:
            lines.append(
                f"{p.piece_id:<16} {p.material_id:<12} {p.sheet_index:>5} "
                f"{p.x:>7g} {p.y:>7g} {p.width:>6} {p.height:>6} "
                f"{'R' if p.rotated else '':>4} {p.banding:>6}"
            )

        lines.append("-" * 78)
        return "\n".join(lines)
