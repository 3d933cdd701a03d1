"""
scan_md/components/formatter.py - Render scan results as JSON or YAML.
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, Optional

import yaml
from pydantic import BaseModel

from scan_md.errors import InvalidConfiguration

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("json", "yml", "yaml")


class _IndentedDumper(yaml.SafeDumper):
    """SafeDumper that indents block sequences under their parent key."""

    def increase_indent(self, flow: bool = False, indentless: bool = False) -> None:
        return super().increase_indent(flow, False)


def to_serializable(result: Any) -> Any:
    """Convert a scan result into plain lists, dicts and strings."""
    if isinstance(result, BaseModel):
        return result.model_dump(mode="json", exclude_none=True)
    if isinstance(result, dict):
        return {str(key): to_serializable(value) for key, value in result.items()}
    if isinstance(result, (list, tuple)):
        return [to_serializable(item) for item in result]
    return result


def format_as_json(result: Any, pretty: bool = False) -> str:
    data = to_serializable(result)
    if pretty:
        return json.dumps(data, indent=2, ensure_ascii=False)
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def format_as_yaml(result: Any) -> str:
    return yaml.dump(
        to_serializable(result),
        Dumper=_IndentedDumper,
        indent=2,
        width=float("inf"),
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
    )


def format_result(result: Any, fmt: str = "json", pretty: bool = False) -> str:
    """Render *result* in *fmt* ("json", "yml" or "yaml")."""
    if fmt not in OUTPUT_FORMATS:
        raise InvalidConfiguration(
            f"format must be one of {', '.join(OUTPUT_FORMATS)}, got {fmt!r}"
        )
    if fmt == "json":
        return format_as_json(result, pretty)
    return format_as_yaml(result)


def output_result(
    result: Any,
    fmt: str = "json",
    pretty: bool = False,
    output: Optional[str] = None,
) -> None:
    """Print the rendered result, or write it to *output* when given."""
    rendered = format_result(result, fmt, pretty)

    if output:
        directory = os.path.dirname(os.path.abspath(output))
        os.makedirs(directory, exist_ok=True)
        with open(output, "w", encoding="utf-8") as f:
            f.write(rendered)
        logger.debug("Wrote %d characters to %s", len(rendered), output)
        print(f"Output written to {output}")
    else:
        print(rendered)
