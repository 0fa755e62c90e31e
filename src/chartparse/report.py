"""Human- and machine-readable views of a parsed chart.

Usage::

    from chartparse.report import ChartSummaryFormatter, chart_to_dict
    text = ChartSummaryFormatter().render(chart)
    data = chart_to_dict(chart)    # JSON-ready

Neither view is chart text: nothing here writes the chart format back out.
"""

from dataclasses import asdict

from .models import Chart, Section


class ChartSummaryFormatter:
    """Render one summary line per section of a :class:`~chartparse.models.Chart`."""

    def render(self, chart: Chart) -> str:
        """Return the summary for *chart*.

        The returned string ends with a single newline unless the chart has no
        sections, in which case it is empty.
        """
        lines = [_summarise_section(section) for section in chart.sections]
        return "".join(f"{line}\n" for line in lines)


def chart_to_dict(chart: Chart) -> dict:
    """Return *chart* as plain dicts and lists, ready for ``json.dumps``."""
    return {"sections": [_section_to_dict(section) for section in chart.sections]}


def _section_to_dict(section: Section) -> dict:
    return {
        "name": section.name,
        "note_events": [asdict(e) for e in section.note_events],
        "special_events": [asdict(e) for e in section.special_events],
        "bpm_events": [asdict(e) for e in section.bpm_events],
        "ts_events": [asdict(e) for e in section.ts_events],
        "generic_events": [asdict(e) for e in section.generic_events],
        "metadata": dict(section.metadata),
    }


def _summarise_section(section: Section) -> str:
    return (
        f"[{section.name}]"
        f" notes={len(section.note_events)}"
        f" specials={len(section.special_events)}"
        f" bpm={len(section.bpm_events)}"
        f" ts={len(section.ts_events)}"
        f" events={len(section.generic_events)}"
        f" metadata={len(section.metadata)}"
    )
