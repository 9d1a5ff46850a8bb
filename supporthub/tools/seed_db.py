"""Seed queues and routing rules from CSV files.

Usage:
    python -m supporthub.tools.seed_db
    python -m supporthub.tools.seed_db --data-dir data
    python -m supporthub.tools.seed_db --drop  # drop existing rules and queues first
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from supporthub.adapters.csv_loader.loader import load_queues, load_routing_rules
from supporthub.adapters.persistence.database import async_session_factory
from supporthub.adapters.persistence.models import QueueModel, RoutingRuleModel
from supporthub.application.use_cases.manage_routing_rules import SORT_ORDER_STEP
from supporthub.config import settings

logger = logging.getLogger(__name__)


async def _drop_data(session: AsyncSession) -> None:
    """Delete rules before queues (FK constraint)."""
    for model in [RoutingRuleModel, QueueModel]:
        await session.execute(delete(model))
    await session.commit()
    logger.info("Dropped all existing routing rules and queues")


async def seed(data_dir: Path, drop: bool = False) -> dict[str, int]:
    """Main seed function. Returns counts of seeded records."""
    counts = {"queues": 0, "routing_rules": 0}

    queue_csv = _find_csv(data_dir, ["queues", "queue"])
    rule_csv = _find_csv(data_dir, ["routing_rules", "rules"])
    if not queue_csv:
        raise FileNotFoundError(f"No queues CSV found in {data_dir}. Expected something like queues.csv")

    async with async_session_factory() as session:
        if drop:
            await _drop_data(session)

        # 1. Seed queues
        for qd in load_queues(queue_csv):
            existing = await session.execute(
                select(QueueModel).where(
                    QueueModel.company_id == qd["company_id"],
                    QueueModel.name == qd["name"],
                )
            )
            if existing.scalar_one_or_none():
                logger.debug("Queue '%s' already exists, skipping", qd["name"])
                continue
            session.add(QueueModel(**qd))
            counts["queues"] += 1
        await session.commit()

        result = await session.execute(select(QueueModel).where(QueueModel.is_deleted.is_(False)))
        queue_ids = {(q.company_id, q.name.lower()): q.id for q in result.scalars()}

        # 2. Seed routing rules (if CSV exists)
        if rule_csv:
            next_sort_order: dict[int, int] = {}
            for rd in load_routing_rules(rule_csv):
                company_id = rd["company_id"]
                queue_id = queue_ids.get((company_id, rd["queue_name"].lower()))
                if queue_id is None:
                    logger.warning(
                        "Rule '%s': queue '%s' not found for company %s, skipping",
                        rd["name"], rd["queue_name"], company_id,
                    )
                    continue

                existing = await session.execute(
                    select(RoutingRuleModel).where(
                        RoutingRuleModel.company_id == company_id,
                        RoutingRuleModel.name == rd["name"],
                        RoutingRuleModel.is_deleted.is_(False),
                    )
                )
                if existing.scalar_one_or_none():
                    logger.debug("Rule '%s' already exists, skipping", rd["name"])
                    continue

                if company_id not in next_sort_order:
                    current_max = await session.execute(
                        select(func.max(RoutingRuleModel.sort_order)).where(
                            RoutingRuleModel.company_id == company_id
                        )
                    )
                    next_sort_order[company_id] = (current_max.scalar() or 0) + SORT_ORDER_STEP
                sort_order = rd["sort_order"]
                if sort_order is None:
                    sort_order = next_sort_order[company_id]
                next_sort_order[company_id] = max(next_sort_order[company_id], sort_order) + SORT_ORDER_STEP

                session.add(RoutingRuleModel(
                    company_id=company_id,
                    queue_id=queue_id,
                    name=rd["name"],
                    description=rd["description"],
                    match_type=rd["match_type"].value,
                    match_operator=rd["match_operator"].value,
                    match_value=rd["match_value"],
                    sort_order=sort_order,
                    is_active=rd["is_active"],
                    auto_assign_agent_id=rd["auto_assign_agent_id"],
                    auto_set_priority=rd["auto_set_priority"].value if rd["auto_set_priority"] else None,
                    auto_add_tags=rd["auto_add_tags"],
                ))
                counts["routing_rules"] += 1
            await session.commit()
        else:
            logger.info("No routing rules CSV found, skipping rule import")

    logger.info("Seed complete: %d queues, %d routing rules", counts["queues"], counts["routing_rules"])
    return counts


def _find_csv(data_dir: Path, name_hints: list[str]) -> Path | None:
    """Find a CSV file matching any of the name hints (checked in order)."""
    files = sorted(data_dir.glob("*.csv"))
    for hint in name_hints:
        for f in files:
            if hint in f.stem.lower():
                logger.info("Found CSV: %s (matched hint '%s')", f.name, hint)
                return f
    return None


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(message)s")

    parser = argparse.ArgumentParser(description="Seed queues and routing rules from CSV files")
    parser.add_argument(
        "--data-dir", type=Path, default=Path(settings.csv_data_path), help="Directory with CSV files"
    )
    parser.add_argument("--drop", action="store_true", help="Drop existing rules and queues first")
    args = parser.parse_args()

    if not args.data_dir.exists():
        logger.error("Data directory not found: %s", args.data_dir)
        sys.exit(1)

    asyncio.run(seed(args.data_dir, drop=args.drop))


if __name__ == "__main__":
    main()
