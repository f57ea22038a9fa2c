# Tab-separated result report
from dataclasses import dataclass
from typing import List, Sequence

from core.errors import OutputWriteFailure
from core.process import ProcessRecord

HEADER = ("Etiqueta", "BT", "AT", "CT", "TAT", "WT", "RT", "Q", "Prioridad")
SUMMARY_TITLE = "--- MÉTRICAS DE RENDIMIENTO ---"


@dataclass
class Averages:
    turnaround: float
    waiting: float
    response: float


def compute_averages(records: Sequence[ProcessRecord]) -> Averages:
    if not records:
        return Averages(0.0, 0.0, 0.0)
    n = len(records)
    return Averages(
        turnaround=sum(p.turnaround_time for p in records) / n,
        waiting=sum(p.waiting_time for p in records) / n,
        response=sum(p.response_time for p in records) / n,
    )


def format_row(p: ProcessRecord) -> str:
    values = (p.label, p.burst_original, p.arrival_time, p.completion_time, p.turnaround_time,
              p.waiting_time, p.response_time, int(p.level), p.priority)
    return "\t".join(str(v) for v in values)


def format_report(records: Sequence[ProcessRecord]) -> List[str]:
    lines = ["\t".join(HEADER)]
    lines.extend(format_row(p) for p in records)
    avg = compute_averages(records)
    lines.append("")
    lines.append(SUMMARY_TITLE)
    lines.append(f"TAT Promedio: {avg.turnaround:.2f}")
    lines.append(f"WT Promedio: {avg.waiting:.2f}")
    lines.append(f"RT Promedio: {avg.response:.2f}")
    return lines


def write_report(path: str, records: Sequence[ProcessRecord]) -> None:
    try:
        with open(path, 'w', encoding='utf-8') as fh:
            for line in format_report(records):
                fh.write(line + "\n")
    except OSError as exc:
        raise OutputWriteFailure(path, exc.strerror or str(exc)) from exc
