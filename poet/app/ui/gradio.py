"""User interface assembly for the Gradio front-end."""

from __future__ import annotations

import gradio as gr

from ..services.analysis_service import AnalysisService
from ..services.result_formatter import ResultFormatter

_EXAMPLE_HAIKU = """An old silent pond

An old silent pond
A frog jumps into the pond
Splash! Silence again.
"""


def create_interface(
    service: AnalysisService,
    formatter: ResultFormatter | None = None,
) -> gr.Blocks:
    """Construct the lookup and analysis tabs."""

    formatter = formatter or ResultFormatter()

    def lookup_interface(term: str) -> str:
        if not term or not term.strip():
            return "Enter a word to look up."
        return formatter.format_lookup(service.lookup(term))

    def analyze_interface(text: str) -> str:
        if not text or not text.strip():
            return "Paste a poem to analyze."
        return formatter.format_analysis(service.analyze(text))

    with gr.Blocks(title="poet") as interface:
        gr.Markdown("# poet\nPronunciations, rhymes and verse forms.")

        with gr.Tab("Lookup"):
            term = gr.Textbox(label="Word", placeholder="flower")
            lookup_button = gr.Button("Look up", variant="primary")
            lookup_output = gr.Markdown()
            lookup_button.click(lookup_interface, inputs=term, outputs=lookup_output)
            term.submit(lookup_interface, inputs=term, outputs=lookup_output)

        with gr.Tab("Analyze"):
            text = gr.Textbox(label="Poem", lines=16, value=_EXAMPLE_HAIKU)
            analyze_button = gr.Button("Analyze", variant="primary")
            analysis_output = gr.Markdown()
            analyze_button.click(analyze_interface, inputs=text, outputs=analysis_output)

    return interface


__all__ = ["create_interface"]
