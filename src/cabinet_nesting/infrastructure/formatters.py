"""Output formatters and exporters for nesting results."""

from __future__ import annotations

import json
from typing import Any

from cabinet_nesting.contracts.dtos import NestingResult
from cabinet_nesting.domain.services.edge_tape import EdgeTapeEstimate


class NestingReportFormatter:
    """Formats a nesting result as a plain-text report."""

    def format(self, result: NestingResult) -> str:
        """Format sheets, placements and unplaced panels as tables."""
        job = result.job
        lines = [
            "NESTING REPORT",
            "=" * 70,
            f"Job:        {job.name}",
            f"Status:     {job.status.value}",
        ]
        if job.order_id:
            lines.append(f"Order:      {job.order_id}")

        if not result.success:
            lines.append(f"Error:      {result.error}")
            return "\n".join(lines)

        lines.append(f"Sheets:     {result.boards_used}")
        lines.append(f"Efficiency: {result.material_efficiency:.1f}%")

        for layout in result.layouts:
            lines.extend(
                [
                    "",
                    f"Sheet {layout.board_index + 1}: {layout.board_id} "
                    f"({layout.width:g} x {layout.height:g} mm"
                    + (f", {layout.material})" if layout.material else ")"),
                    "-" * 70,
                    f"{'Panel':<20} {'X':>8} {'Y':>8} {'Width':>8} {'Height':>8}  Rotated",
                ]
            )
            for panel in result.panels_for(layout):
                lines.append(
                    f"{panel.panel_id:<20} {panel.x:>8g} {panel.y:>8g} "
                    f"{panel.width:>8g} {panel.height:>8g}  {'yes' if panel.rotated else 'no'}"
                )

        if result.unused_panels:
            lines.extend(["", "UNPLACED PANELS", "-" * 70])
            for panel in result.unused_panels:
                lines.append(f"{panel.name:<20} {panel.width:g} x {panel.height:g} mm")

        return "\n".join(lines)


class EdgeTapeReportFormatter:
    """Formats edge tape estimates."""

    def format(self, estimates: list[EdgeTapeEstimate]) -> str:
        if not estimates:
            return "No edge tapes configured."

        lines = [
            "EDGE TAPE",
            "=" * 60,
            f"{'Tape':<20} {'Meters':>10} {'Cost':>10} {'Reels':>6} {'Short':>6}",
            "-" * 60,
        ]
        for estimate in estimates:
            lines.append(
                f"{estimate.tape.name:<20} {estimate.length:>10.2f} "
                f"{estimate.cost:>10.2f} {estimate.reels:>6} {estimate.shortfall_reels:>6}"
            )
        return "\n".join(lines)


class NestingJsonExporter:
    """Exports nesting results as JSON."""

    def export(self, result: NestingResult) -> str:
        """Export a nesting result as a JSON string."""
        return json.dumps(self.to_dict(result), indent=2)

    def to_dict(self, result: NestingResult) -> dict[str, Any]:
        return {
            "success": result.success,
            "job": result.job.to_record(),
            "layouts": [
                {
                    **layout.to_record(),
                    "panels": [p.to_record() for p in result.panels_for(layout)],
                }
                for layout in result.layouts
            ],
            "unused_panels": [
                {
                    "id": panel.id,
                    "name": panel.name,
                    "width": panel.width,
                    "height": panel.height,
                }
                for panel in result.unused_panels
            ],
            "material_efficiency": result.material_efficiency,
            "boards_used": result.boards_used,
            "error": result.error,
        }
