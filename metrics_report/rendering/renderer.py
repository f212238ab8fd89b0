"""Markdown report with Mermaid stacked-bar charts."""

from __future__ import annotations

import json
from typing import Iterable, Sequence

from metrics_report.core.logger import get_logger

from .labels import LABEL_BUDGET, thin_time_labels
from .models import NamedSeries, RenderGroup
from .stacking import StackingError, stack_layers

logger = get_logger("report.renderer")

REPORT_TITLE = "## Workflow Metrics"


def _plain_number(value: float) -> float | int:
    # 4096.0 -> 4096
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def _json_array(values: Sequence) -> str:
    return json.dumps(list(values), separators=(",", ":"))


def legend_line(series: NamedSeries) -> str:
    return f"* $${{\\color{{{series.color}}} \\verb|{series.color}: {series.name}|}}$$"


class ChartRenderer:
    def __init__(self, label_budget: int = LABEL_BUDGET):
        self.label_budget = label_budget

    def render(self, groups: Iterable[RenderGroup], report_id: str) -> str:
        """Report header followed by one section per group that has data."""
        sections = []
        skipped = 0
        for group in groups:
            if not group.has_data:
                skipped += 1
                continue
            sections.append(self.render_group(group))
        logger.debug(
            "report_rendered",
            extra={"sections": len(sections), "skipped_groups": skipped},
        )
        header = f"{REPORT_TITLE}\n\n### Metrics ID\n\n{report_id}"
        return "\n\n".join([header, *sections])

    def render_group(self, group: RenderGroup) -> str:
        legends = "\n".join(legend_line(s) for s in group.series)
        chart = self.render_chart(group)
        if group.step_name is None:
            heading = "#### All"
            body = chart
        else:
            heading = f"#### Step `{group.step_name}`"
            body = f"<details>\n<summary>Chart</summary>\n\n{chart}\n\n</details>"
        return f"### {group.title}\n\n#### Legends\n\n{legends}\n\n{heading}\n\n{body}"

    def render_chart(self, group: RenderGroup) -> str:
        layers = stack_layers([s.data for s in group.series])
        if layers and len(layers[0]) != len(group.times):
            raise StackingError(
                f"{group.title}: {len(layers[0])} points for {len(group.times)} times"
            )
        palette = ", ".join(s.color for s in group.series)
        labels = thin_time_labels(group.times, self.label_budget)
        y_axis = f'y-axis "{group.y_axis.title}"'
        if group.y_axis.range:
            y_axis += f" {group.y_axis.range}"
        lines = [
            "```mermaid",
            "%%{",
            "  init: {",
            '    "themeVariables": {',
            '      "xyChart": {',
            f'        "plotColorPalette": "{palette}"',
            "      }",
            "    }",
            "  }",
            "}%%",
            "xychart",
            "",
            f'x-axis "Time" {_json_array(labels)}',
            y_axis,
            *(f"bar {_json_array(map(_plain_number, layer))}" for layer in layers),
            "```",
        ]
        return "\n".join(lines)
