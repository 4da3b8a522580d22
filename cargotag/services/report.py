# SPDX-License-Identifier: MIT

"""Result Reporter: named outputs and the human summary.

Outputs go to the file named by GITHUB_OUTPUT (heredoc-style entries, safe
for any value) or, outside the host platform, to the console as
`name=value` lines. The summary is best-effort.
"""

from __future__ import annotations

import html
import uuid
from collections.abc import Mapping
from pathlib import Path

from cargotag.core.result import Err, Ok, Result
from cargotag.output.console import ConsoleProtocol
from cargotag.services.errors import TagError
from cargotag.services.tagging import RunOutputs

__all__ = [
    "format_output_entry",
    "render_summary_html",
    "report",
    "write_outputs",
    "write_summary",
]

_SUMMARY_TITLE = "Tag created ✅"


def format_output_entry(name: str, value: str, delimiter: str | None = None) -> str:
    """Format one output in the `name<<DELIM` multiline file syntax."""
    delim = delimiter or f"ghadelimiter_{uuid.uuid4()}"
    return f"{name}<<{delim}\n{value}\n{delim}\n"


def _summary_rows(outputs: RunOutputs) -> list[tuple[str, str]]:
    return [
        ("Version", outputs.version),
        ("Tag", outputs.tag_name),
        ("Pushed", "true" if outputs.decision.pushed else "false"),
    ]


def render_summary_html(outputs: RunOutputs) -> str:
    rows = "".join(
        f"<tr><th>{html.escape(label)}</th><td>{html.escape(value)}</td></tr>"
        for label, value in _summary_rows(outputs)
    )
    return f"<h2>{_SUMMARY_TITLE}</h2>\n<table>{rows}</table>\n"


def write_outputs(
    outputs: RunOutputs,
    env: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[None, TagError]:
    """Emit version, tag-created and tag-name for downstream steps."""
    values = outputs.as_outputs()
    output_file = env.get("GITHUB_OUTPUT", "").strip()
    if not output_file:
        for name, value in values.items():
            console.print(f"{name}={value}")
        return Ok(None)

    payload = "".join(format_output_entry(name, value) for name, value in values.items())
    try:
        with Path(output_file).open("a", encoding="utf-8") as f:
            f.write(payload)
    except OSError as e:
        return Err(
            TagError(
                kind="output_failed",
                message=f"Could not write outputs to {output_file}",
                hint=str(e),
            )
        )
    return Ok(None)


def write_summary(outputs: RunOutputs, env: Mapping[str, str], console: ConsoleProtocol) -> None:
    """Show the summary table; also append it to GITHUB_STEP_SUMMARY when set."""
    console.table(_SUMMARY_TITLE, _summary_rows(outputs))

    summary_file = env.get("GITHUB_STEP_SUMMARY", "").strip()
    if not summary_file:
        return
    try:
        with Path(summary_file).open("a", encoding="utf-8") as f:
            f.write(render_summary_html(outputs))
    except OSError as e:
        console.warning(f"Could not write job summary: {e}")


def report(
    outputs: RunOutputs,
    env: Mapping[str, str],
    console: ConsoleProtocol,
) -> Result[None, TagError]:
    """Write outputs for every successful run, the summary only when a tag was created."""
    written = write_outputs(outputs, env, console)
    if isinstance(written, Err):
        return written
    if outputs.tag_created:
        write_summary(outputs, env, console)
    return Ok(None)
