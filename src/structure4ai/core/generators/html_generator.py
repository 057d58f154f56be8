from __future__ import annotations

"""
HTML Generator.

Wraps the tree-text rendering in a self-contained page with embedded CSS,
a header and summary counters. All interpolated text is escaped.
"""

import html

from structure4ai.core.analysis.tree_renderer import render_tree_lines
from structure4ai.core.generators.base import OutputGenerator
from structure4ai.domain.output_models import OutputDocument
from structure4ai.domain.tree_models import StructureModel

_STYLE = """
    body { font-family: -apple-system, "Segoe UI", Roboto, sans-serif; margin: 0; background: #f5f6f8; color: #1f2328; }
    header { background: #24292f; color: #ffffff; padding: 24px 32px; }
    header h1 { margin: 0 0 8px 0; font-size: 24px; }
    header p { margin: 2px 0; font-size: 13px; opacity: 0.85; }
    .summary { display: flex; gap: 16px; padding: 16px 32px; flex-wrap: wrap; }
    .card { background: #ffffff; border: 1px solid #d0d7de; border-radius: 6px; padding: 12px 20px; min-width: 120px; }
    .card .value { font-size: 22px; font-weight: 600; }
    .card .label { font-size: 12px; color: #57606a; text-transform: uppercase; }
    main { padding: 0 32px 32px 32px; }
    pre.tree { background: #ffffff; border: 1px solid #d0d7de; border-radius: 6px; padding: 16px;
               font-family: "Cascadia Code", Consolas, "DejaVu Sans Mono", monospace; font-size: 13px;
               line-height: 1.45; overflow-x: auto; }
"""


def _e(text: str) -> str:
    return html.escape(text, quote=False)


class HtmlGenerator(OutputGenerator):
    FORMAT_NAME = "HTML"
    EXTENSION = "html"
    ALIASES = ("html", "htm")

    def generate(self, model: StructureModel, root_path: str) -> OutputDocument:
        tree = "\n".join(_e(line) for line in render_tree_lines(model.root_name, model.lines))

        generated = ""
        if self.config.output.include_timestamp:
            generated = f"        <p>Generated in: {_e(self._timestamp())}</p>\n"

        cards = "".join(
            f'        <div class="card"><div class="value">{value}</div>'
            f'<div class="label">{label}</div></div>\n'
            for label, value in (
                ("Folders", model.folder_count),
                ("Files", model.file_count),
                ("Errors", model.error_count),
                ("Total", model.processed_count),
            )
        )

        content = (
            "<!DOCTYPE html>\n"
            '<html lang="en">\n'
            "<head>\n"
            '    <meta charset="utf-8">\n'
            f"    <title>Project Structure: {_e(model.root_name)}</title>\n"
            f"    <style>{_STYLE}    </style>\n"
            "</head>\n"
            "<body>\n"
            "    <header>\n"
            f"        <h1>Project Structure: {_e(model.root_name)}</h1>\n"
            f"        <p>Path: {_e(root_path)}</p>\n"
            f"{generated}"
            "    </header>\n"
            '    <section class="summary">\n'
            f"{cards}"
            "    </section>\n"
            "    <main>\n"
            f'<pre class="tree">{tree}</pre>\n'
            "    </main>\n"
            "</body>\n"
            "</html>\n"
        )
        return self._document(content)
