"""Report builder — text and JSON output for colorswitch runs."""

import json
from typing import Any

from colorswitch.core.types import Report


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    dim = f'{report.image_width}×{report.image_height}'
    lines = [f'colorswitch: {report.image_path} ({dim})', '']

    for name, data in report.outputs.items():
        lines.append(f'  {name:<10} {data["file"]}  ({data.get("elapsed_ms", "?")} ms)')

    if not report.outputs:
        lines.append('  (no outputs)')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'outputs': [{'variant': name, **data} for name, data in report.outputs.items()],
    }
    return json.dumps(obj, indent=2)
