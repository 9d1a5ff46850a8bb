"""CSV loader — reads and normalizes queue and routing rule files."""

from __future__ import annotations

import csv
import logging
from pathlib import Path

from supporthub.adapters.csv_loader.normalizer import (
    clean_string,
    normalize_column_name,
    parse_bool,
    parse_enum,
)
from supporthub.domain.value_objects.enums import (
    RuleMatchOperator,
    RuleMatchType,
    TicketPriority,
)

logger = logging.getLogger(__name__)


def _sniff_dialect(sample: str) -> type[csv.Dialect]:
    """Detect delimiter (comma/semicolon/tab) to support Excel exports."""
    if not sample:
        return csv.excel

    first_line = sample.splitlines()[0]
    delims = [";", ",", "\t"]
    counts = {d: first_line.count(d) for d in delims}
    best_delim = max(counts, key=counts.get)

    if counts[best_delim] > 0:
        class DynamicDialect(csv.excel):
            delimiter = best_delim
        return DynamicDialect

    return csv.excel


def _read_csv(file_path: Path, encoding: str = "utf-8-sig") -> list[dict[str, str | None]]:
    """Read a CSV file with BOM handling and column normalization.

    Args:
        file_path: path to the CSV file.
        encoding: file encoding (utf-8-sig strips BOM automatically).

    Returns:
        List of dicts with normalized column names.
    """
    with open(file_path, encoding=encoding, newline="") as f:
        sample = f.read(4096)
        f.seek(0)
        reader = csv.DictReader(f, dialect=_sniff_dialect(sample))
        if reader.fieldnames is None:
            raise ValueError(f"CSV file {file_path} has no header row")

        col_map = {col: normalize_column_name(col) for col in reader.fieldnames}
        rows = []
        for raw_row in reader:
            row = {col_map[k]: clean_string(v) for k, v in raw_row.items() if k is not None}
            rows.append(row)

    logger.info("Loaded %d rows from %s (columns: %s)", len(rows), file_path.name, list(col_map.values()))
    return rows


def load_queues(file_path: Path) -> list[dict]:
    """Load and normalize the queues CSV.

    Expected columns (after normalization):
        company_id, name, description, is_default, is_active
    """
    queues = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        company_id = _parse_int(row.get("company_id") or row.get("company"))
        name = row.get("name") or row.get("queue")
        if company_id is None or not name:
            logger.warning("%s:%d: queue row without company_id/name, skipping", file_path.name, line_no)
            continue
        queues.append({
            "company_id": company_id,
            "name": name,
            "description": row.get("description"),
            "is_default": parse_bool(row.get("is_default") or row.get("default"), False),
            "is_active": parse_bool(row.get("is_active") or row.get("active"), True),
        })
    logger.info("Parsed %d queues", len(queues))
    return queues


def load_routing_rules(file_path: Path) -> list[dict]:
    """Load and normalize the routing rules CSV.

    Expected columns (after normalization):
        company_id, queue (queue name), name, match_type, match_operator,
        match_value, sort_order, is_active, auto_assign_agent_id,
        auto_set_priority, auto_add_tags, description

    Rows whose match type or operator cannot be recognized are skipped.
    """
    rules = []
    for line_no, row in enumerate(_read_csv(file_path), start=2):
        company_id = _parse_int(row.get("company_id") or row.get("company"))
        queue_name = row.get("queue") or row.get("queue_name")
        name = row.get("name") or row.get("rule")
        if company_id is None or not queue_name or not name:
            logger.warning(
                "%s:%d: rule row without company_id/queue/name, skipping", file_path.name, line_no
            )
            continue

        match_type = parse_enum(RuleMatchType, row.get("match_type"))
        match_operator = parse_enum(RuleMatchOperator, row.get("match_operator") or row.get("operator"))
        if match_type is None or match_operator is None:
            logger.warning(
                "%s:%d: rule '%s' has unknown match type/operator (%s/%s), skipping",
                file_path.name, line_no, name, row.get("match_type"), row.get("match_operator"),
            )
            continue

        rules.append({
            "company_id": company_id,
            "queue_name": queue_name,
            "name": name,
            "description": row.get("description"),
            "match_type": match_type,
            "match_operator": match_operator,
            "match_value": row.get("match_value") or "",
            "sort_order": _parse_int(row.get("sort_order")),
            "is_active": parse_bool(row.get("is_active") or row.get("active"), True),
            "auto_assign_agent_id": _parse_int(row.get("auto_assign_agent_id")),
            "auto_set_priority": parse_enum(TicketPriority, row.get("auto_set_priority")),
            "auto_add_tags": row.get("auto_add_tags"),
        })
    logger.info("Parsed %d routing rules", len(rules))
    return rules


def _parse_int(value: str | None) -> int | None:
    if not value:
        return None
    try:
        # handle "4", "4.0"
        return int(float(value.replace(",", ".").strip()))
    except (ValueError, OverflowError):
        return None
