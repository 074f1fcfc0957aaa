"""Debug text output for layout analysis.

This module creates a text dump of a layout showing:
- One row per day with every lane cell
- Lane usage histogram
- Per-event span and lane table
"""

from collections import defaultdict
from pathlib import Path
from typing import Iterable, Optional, Union

from calgrid.domain.models import DayBucketMap, Event, Slot

CELL_WIDTH = 10


class DebugGenerator:
    """Generates debug text output for a layout.

    Lane cells are drawn as ``[id>`` on the first day of a span, ``=id=``
    in the middle, ``<id]`` on the last day, ``[id]`` for one-day events
    and ``.`` for placeholders.
    """

    def generate(
        self,
        layout: DayBucketMap,
        output_path: Union[str, Path],
        events: Optional[Iterable[Event]] = None,
    ) -> str:
        """Generate debug text output and save to file.

        Args:
            layout: The layout to dump.
            output_path: Path to save the text file.
            events: Events of the layout, used for titles.

        Returns:
            The generated text content.
        """
        content = self._generate_content(layout, events)
        Path(output_path).write_text(content)
        return content

    def generate_to_string(
        self,
        layout: DayBucketMap,
        events: Optional[Iterable[Event]] = None,
    ) -> str:
        """Generate debug text output and return as string."""
        return self._generate_content(layout, events)

    def _generate_content(
        self,
        layout: DayBucketMap,
        events: Optional[Iterable[Event]],
    ) -> str:
        """Generate the full debug content."""
        titles = {event.id: event.title for event in events or []}
        lines = []

        # Header
        lines.append("=" * 80)
        date_range = layout.date_range
        lines.append(f"LAYOUT DEBUG OUTPUT - {date_range.start} to {date_range.end}")
        lines.append("=" * 80)
        lines.append("")

        lines.append(f"Days: {len(layout)}")
        lines.append(f"Max lanes: {layout.max_lanes}")
        lines.append("")

        if not layout:
            lines.append("(empty range)")
            lines.append("")
            lines.append("=" * 80)
            return "\n".join(lines)

        # Day grid
        lines.append("-" * 80)
        lines.append("DAY GRID")
        lines.append("-" * 80)
        header = " ".join(f"{f'L{lane}':^{CELL_WIDTH}}" for lane in range(layout.max_lanes))
        lines.append(f"{'Day':<14} {header}")

        for day, bucket in layout.items():
            cells = " ".join(f"{self._cell(slot):^{CELL_WIDTH}}" for slot in bucket)
            marker = "*" if day.weekday() >= 5 else " "
            lines.append(f"{day.isoformat()} {day.strftime('%a')}{marker} {cells}".rstrip())

        lines.append("")

        # Lane usage histogram
        lines.append("-" * 80)
        lines.append("LANE USAGE")
        lines.append("-" * 80)

        lane_counts = defaultdict(int)
        placeholder_counts = defaultdict(int)
        for bucket in layout.values():
            for lane, slot in enumerate(bucket):
                if slot.is_empty:
                    placeholder_counts[lane] += 1
                else:
                    lane_counts[lane] += 1

        for lane in range(layout.max_lanes):
            count = lane_counts[lane]
            bar = "#" * count + "." * placeholder_counts[lane]
            lines.append(
                f"L{lane:<3}: {bar} ({count} days, {placeholder_counts[lane]} placeholders)"
            )

        lines.append("")

        # Per-event spans
        lines.append("-" * 80)
        lines.append("EVENT SPANS")
        lines.append("-" * 80)
        lines.append(f"{'Event':<12} {'Lane':>4} {'First':^12} {'Last':^12} {'Days':>4}  Title")

        first_seen = {}
        for day, bucket in layout.items():
            for lane, slot in enumerate(bucket):
                if slot.is_empty:
                    continue
                entry = first_seen.setdefault(slot.event_id, [lane, day, day, 0])
                entry[2] = day
                entry[3] += 1

        for event_id, (lane, first, last, count) in first_seen.items():
            title = titles.get(event_id, "")
            lines.append(
                f"{event_id[:12]:<12} {lane:>4} {first.isoformat():^12} "
                f"{last.isoformat():^12} {count:>4}  {title}".rstrip()
            )

        lines.append("")
        lines.append("=" * 80)
        lines.append("END OF DEBUG OUTPUT")
        lines.append("=" * 80)

        return "\n".join(lines)

    @staticmethod
    def _cell(slot: Slot) -> str:
        """Render one lane cell."""
        if slot.is_empty:
            return "."
        label = slot.event_id[: CELL_WIDTH - 2]
        if slot.is_span_start and slot.is_span_end:
            return f"[{label}]"
        if slot.is_span_start:
            return f"[{label}>"
        if slot.is_span_end:
            return f"<{label}]"
        return f"={label}="
