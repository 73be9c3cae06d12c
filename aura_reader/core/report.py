"""Report builder: text and JSON output for aura-tool results."""

import json
from dataclasses import asdict
from typing import Any

from aura_reader.core.types import ChakraColor, Report


def chakra_dict(c: ChakraColor) -> dict[str, Any]:
    d = asdict(c)
    d['traits'] = list(c.traits)
    d['keywords'] = list(c.keywords)
    return d


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = [f'aura-tool: {report.image_path} ({report.image_width}×{report.image_height})', '']

    for name, data in report.results.items():
        lines.append(f'── {name}')
        if name == 'colours' and 'dominant' in data:
            for c in data['dominant']:
                lines.append(f'  {c["hex"]}  {c["pct"]:5.1f}%  ~{c["nearest"]}')
        elif name == 'chakras' and 'selection' in data:
            names = ', '.join(f'{c["name"]} ({c["chakra"]})' for c in data['selection'])
            lines.append(f'  {names}  [{data.get("source", "?")}]')
        elif name == 'reading' and 'text' in data:
            lines.append(f'  {data["text"]}')
        elif name == 'overlay' and 'file' in data:
            lines.append(f'  wrote {data["file"]} ({data["width"]}×{data["height"]}, q={data["quality"]})')
        else:
            for k, v in data.items():
                lines.append(f'  {name}.{k}: {v}')
        lines.append('')

    for err in report.errors:
        lines.append(f'ERROR: {err}')
    return '\n'.join(lines).rstrip() + '\n'


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'image': report.image_path,
        'dimensions': {'width': report.image_width, 'height': report.image_height},
        'results': report.results,
    }
    if report.errors:
        obj['errors'] = report.errors
    return json.dumps(obj, indent=2)
