"""Text table for the window report."""

from datetime import date

from tabulate import tabulate

from currency_window.pipeline import WindowReport


HEADER_DATE_FORMAT = "%d/%m/%Y"
CELL_DATE_FORMAT = "%d.%m.%Y"

# Significant digits: per-unit rates of currencies quoted per 10000 units are near 0.003
VALUE_FORMAT = "{:.6g}"


def _value_with_date(value: float, on: date) -> str:
    return f"{VALUE_FORMAT.format(value)} ({on.strftime(CELL_DATE_FORMAT)})"


def build_headers(start: date, stop: date) -> list[str]:
    window = f"{start.strftime(HEADER_DATE_FORMAT)} - {stop.strftime(HEADER_DATE_FORMAT)}"
    return ["#", "Currency", "Min (date)", "Max (date)", f"AVG ({window})"]


def build_rows(report: WindowReport) -> list[list[str]]:
    """Numbered rows ordered by currency code."""
    rows = []
    for number, (code, stat) in enumerate(report.sorted_stats(), start=1):
        rows.append([
            str(number),
            code,
            _value_with_date(stat.min_value, stat.min_date),
            _value_with_date(stat.max_value, stat.max_date),
            VALUE_FORMAT.format(stat.average(report.period)),
        ])
    return rows


def render_report(report: WindowReport) -> str:
    """
    Render the report as a bordered table.

    Every body row is followed by a separator; the last row is the footer,
    set apart by a double rule like the header.
    """
    rows = build_rows(report)
    table = tabulate(
        rows,
        headers=build_headers(report.start, report.stop),
        tablefmt="grid",
        disable_numparse=True,
    )
    if not rows:
        return table

    lines = table.splitlines()
    # Rule above the last row: top, header, rule, rows..., bottom
    lines[-3] = lines[-3].replace("-", "=")
    return "\n".join(lines)
