# Workload file parser
import re
import sys
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from core.descriptor import ProcessDescriptor
from core.level import QueueLevel

FIELD_SEPARATOR = ';'
MIN_FIELDS = 5
BOM = '\ufeff'
INTEGER = re.compile(r'[+-]?[0-9]+')


@dataclass
class MalformedRecord:
    line_no: int
    line: str
    reason: str

    def __str__(self):
        return f"line {self.line_no}: {self.reason}: {self.line}"


ParsedRecord = Union[ProcessDescriptor, MalformedRecord]


def _to_int(text: str):
    if not INTEGER.fullmatch(text):
        return None
    return int(text)


def parse_record(line: str, line_no: int) -> ParsedRecord:
    """Parse one `label;burst;arrival;level;priority` record.

    The line must already be trimmed and must not be a comment. Extra
    fields past the fifth are ignored.
    """
    fields = [f.strip() for f in line.split(FIELD_SEPARATOR)]
    if len(fields) < MIN_FIELDS:
        return MalformedRecord(line_no, line, f"expected {MIN_FIELDS} fields, found {len(fields)}")
    label = fields[0]
    numbers = [_to_int(f) for f in fields[1:MIN_FIELDS]]
    if any(n is None for n in numbers):
        return MalformedRecord(line_no, line, "non-integer numeric field")
    burst, arrival, level, priority = numbers
    if not QueueLevel.is_valid(level):
        return MalformedRecord(line_no, line, f"queue level {level} outside 1-3")
    return ProcessDescriptor(label, burst, arrival, level, priority)


def parse_workload(lines: Iterable[str]) -> Tuple[List[ProcessDescriptor], List[MalformedRecord]]:
    descriptors: List[ProcessDescriptor] = []
    errors: List[MalformedRecord] = []
    for line_no, raw in enumerate(lines, start=1):
        if line_no == 1 and raw.startswith(BOM):
            raw = raw[len(BOM):]
        line = raw.strip()
        if not line or line.startswith('#'):
            continue
        record = parse_record(line, line_no)
        if isinstance(record, MalformedRecord):
            errors.append(record)
        else:
            descriptors.append(record)
    return descriptors, errors


def load_workload(path: str) -> List[ProcessDescriptor]:
    """Read a workload file, reporting skipped records on stderr.

    An unreadable file yields an empty workload.
    """
    try:
        # undecodable bytes become U+FFFD and only affect the row they sit in
        with open(path, 'r', encoding='utf-8-sig', errors='replace') as fh:
            descriptors, errors = parse_workload(fh)
    except OSError as exc:
        print(f"Error: cannot open input file {path}: {exc.strerror or exc}", file=sys.stderr)
        return []
    for err in errors:
        print(f"skipping {err}", file=sys.stderr)
    return descriptors
