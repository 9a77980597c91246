"""Render lookups and stanza reports as Markdown-flavoured text."""

from __future__ import annotations

from typing import List, Sequence

from poet.core import BestInterpretation, LineError

from .analysis_service import LookupResult, StanzaReport


class ResultFormatter:
    """Plain text that reads well in a terminal and renders as Markdown."""

    def __init__(self, *, max_similar: int = 25) -> None:
        self.max_similar = max_similar

    def format_lookup(self, result: LookupResult) -> str:
        if not result.found:
            return f"Not found: {result.term}"

        output: List[str] = [f"### {result.normalized}", ""]
        for entry in result.entries:
            plural = "" if entry.syllables == 1 else "s"
            output.append(f"- `{entry.dict_key}` {entry.phonemes} ({entry.syllables} syllable{plural})")

        output.append("")
        if not result.similar:
            output.append("No rhymes found.")
            return "\n".join(output)

        output.append("**Rhymes**")
        for similar in result.similar[: self.max_similar]:
            output.append(
                f"- {similar.word} (score {similar.score}, {similar.syllable_count} syllables)"
            )
        hidden = len(result.similar) - self.max_similar
        if hidden > 0:
            output.append(f"- ... {hidden} more")
        return "\n".join(output)

    def _format_form(self, name: str, best: BestInterpretation) -> List[str]:
        verdict = "yes" if best.result.ok else "no"
        output = [f"**{name.title()}**: {verdict}"]
        if best.result.ok:
            return output

        if best.truncated:
            output.append(
                f"(checked {best.examined} of {best.size} interpretations)"
            )
        view = best.view
        for error in best.result.errors:
            if isinstance(error, LineError) and error.line_index < len(view):
                line_number = view[error.line_index].line.line_number
                output.append(f"- line {line_number}: {error.message}")
            else:
                output.append(f"- {error.message}")
        return output

    def format_stanza(self, report: StanzaReport, number: int) -> str:
        stanza = report.stanza
        first = stanza.first_line_number
        last = stanza.lines[-1].line_number if stanza.lines else first
        heading = f"## Stanza {number} (lines {first}-{last})"
        if stanza.title:
            heading += f": {stanza.title}"

        output: List[str] = [heading, ""]
        best = min(
            report.forms.values(),
            key=lambda candidate: len(candidate.result.errors),
            default=None,
        )
        if best is not None:
            for line_view in best.view:
                output.append(
                    f"    {line_view.line.line_number:>4} [{line_view.known_syllables:>2}] "
                    f"{line_view.line.raw_text.strip()}"
                )
            output.append("")

        output.append(
            f"Interpretations: {report.interpretations} "
            f"(unpruned {report.unpruned_interpretations})"
        )
        if report.unknown_words:
            output.append(f"Unknown words: {', '.join(report.unknown_words)}")
        output.append("")

        for name, form_best in report.forms.items():
            output.extend(self._format_form(name, form_best))
        return "\n".join(output)

    def format_analysis(self, reports: Sequence[StanzaReport]) -> str:
        if not reports:
            return "No stanzas found. Stanzas need at least two consecutive lines."
        return "\n\n".join(
            self.format_stanza(report, number) for number, report in enumerate(reports, start=1)
        )


__all__ = ["ResultFormatter"]
