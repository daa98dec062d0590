"""Post-run reporting: timeline chart, lifespan summary and output files.

Three artifacts are produced on every non-dry run:

  officeholder_lifespans.csv     : the final record list, ordered by birth year.
  officeholder_skipped_rows.csv  : rows dropped by the parser or normalizer,
                                   with the reason, for data-quality review.
  officeholder_timeline.png      : one horizontal segment per person from
                                   birth to death (or the as-of year for the
                                   living), colored by alive/deceased.

Runnable standalone against a saved page:
    python report.py page.html
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
from matplotlib.lines import Line2D  # noqa: E402

from assembler import lifespan_stats, timeline_view  # noqa: E402
from csv_sink import write_records, write_skipped  # noqa: E402
from models import LifespanStats, PipelineResult, TimelineEntry  # noqa: E402

LOGGER = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Configurable paths / styling
# ---------------------------------------------------------------------------

_DEFAULT_CHART_OUTPUT_PATH = "officeholder_timeline.png"

ALIVE_COLOR = "tab:green"
DECEASED_COLOR = "tab:gray"

# ---------------------------------------------------------------------------
# Chart
# ---------------------------------------------------------------------------


def render_timeline(entries: list[TimelineEntry], chart_path: str | None = None, title: str | None = None) -> Path:
    """Draw one horizontal line per person and save it as a PNG."""
    path = Path(chart_path or os.getenv("CHART_OUTPUT_PATH", _DEFAULT_CHART_OUTPUT_PATH))
    path.parent.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(10, max(4.0, 0.35 * len(entries) + 1.5)))
    for y, entry in enumerate(entries):
        ax.hlines(
            y,
            entry.birth_year,
            entry.plot_death_year,
            colors=ALIVE_COLOR if entry.is_alive else DECEASED_COLOR,
            linewidth=4,
        )

    ax.set_yticks(range(len(entries)))
    ax.set_yticklabels([e.name for e in entries], fontsize=8)
    ax.invert_yaxis()  # earliest birth at the top
    ax.set_xlabel("Year")
    ax.set_title(title or "Lifespans of office-holders")
    ax.grid(True, axis="x", alpha=0.3)
    ax.legend(
        handles=[
            Line2D([0], [0], color=DECEASED_COLOR, linewidth=4, label="Deceased"),
            Line2D([0], [0], color=ALIVE_COLOR, linewidth=4, label="Living"),
        ],
        loc="lower left",
    )
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)

    LOGGER.info("report: timeline of %d people → %s", len(entries), path)
    return path


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------


def format_stats(stats: LifespanStats) -> str:
    """Human-readable lifespan summary."""
    lines = [
        f"People: {stats.total}  living={stats.alive}  deceased={stats.deceased}",
    ]
    if stats.deceased:
        lines.append(
            f"Age at death: mean={stats.mean_age_at_death} median={stats.median_age_at_death} "
            f"min={stats.min_age_at_death} max={stats.max_age_at_death}"
        )
        lines.append(f"Longest lived:  {stats.longest_lived} ({stats.max_age_at_death})")
        lines.append(f"Shortest lived: {stats.shortest_lived} ({stats.min_age_at_death})")
    else:
        lines.append("Age at death: n/a (nobody in the dataset has died)")
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Public entry point
# ---------------------------------------------------------------------------


def generate_reports(
    result: PipelineResult,
    as_of_year: int | None = None,
    csv_path: str | None = None,
    skipped_path: str | None = None,
    chart_path: str | None = None,
    draw_chart: bool = True,
) -> dict[str, Path]:
    """Write the record CSV, skipped-row CSV and, optionally, the timeline chart."""
    outputs = {
        "records": write_records(result.records, csv_path),
        "skipped": write_skipped(result.skipped, skipped_path),
    }

    if draw_chart:
        if result.records:
            entries = timeline_view(result.records, as_of_year=as_of_year)
            outputs["chart"] = render_timeline(entries, chart_path)
        else:
            LOGGER.warning("report: no records, timeline chart not drawn")

    LOGGER.info("report: %s", format_stats(lifespan_stats(result.records)).replace("\n", " | "))
    return outputs


# ---------------------------------------------------------------------------
# Standalone execution
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import sys

    from dotenv import load_dotenv

    from pipeline import run_pipeline

    load_dotenv()
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    if len(sys.argv) < 2:
        print("usage: python report.py PAGE.html")
        sys.exit(2)
    markup = Path(sys.argv[1]).read_text(encoding="utf-8")
    outputs = generate_reports(run_pipeline(markup))
    for name, out in outputs.items():
        print(f"{name:<8} → {out}")
