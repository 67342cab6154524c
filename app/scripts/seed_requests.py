"""
Seed a store with the five sample delivery requests used for manual testing.

    python -m app.scripts.seed_requests --backend mongo

Requests are driven through the registry (create, then claim / complete) so the
seeded "delivering" and "completed" records carry a deliverer and a real
creation timestamp.
"""
import argparse
import asyncio
import logging
from typing import List, Optional

from app.core.config import get_settings
from app.core.enums import RequestStatus
from app.core.logging import configure_logging
from app.db.session import build_registry
from app.models.delivery_requests import DeliveryRequest
from app.services.registry import RequestRegistry

log = logging.getLogger(__name__)

SAMPLE_REQUESTS = [
    # urgent
    {
        "item": "薬（血圧の薬）",
        "requester_name": "佐藤花子",
        "location": (35.6895, 139.6917),
        "priority": "high",
        "phone": "090-1111-2222",
        "status": "waiting",
        "delivery_person_id": None,
    },
    {
        "item": "パン 3個",
        "requester_name": "山田次郎",
        "location": (35.6762, 139.6503),
        "priority": "medium",
        "phone": "090-3333-4444",
        "status": "waiting",
        "delivery_person_id": None,
    },
    {
        "item": "お菓子",
        "requester_name": "鈴木三郎",
        "location": (35.6635, 139.7514),
        "priority": "low",
        "phone": None,
        "status": "waiting",
        "delivery_person_id": None,
    },
    # in flight
    {
        "item": "お米 5kg",
        "requester_name": "田中一郎",
        "location": (35.6581, 139.7414),
        "priority": "medium",
        "phone": "090-5555-6666",
        "status": "delivering",
        "delivery_person_id": "delivery_test123",
    },
    # history
    {
        "item": "野菜セット",
        "requester_name": "伊藤美子",
        "location": (35.6785, 139.7923),
        "priority": "medium",
        "phone": "090-7777-8888",
        "status": "completed",
        "delivery_person_id": "delivery_test456",
    },
]


async def seed(registry: RequestRegistry) -> List[DeliveryRequest]:
    seeded = []
    for sample in SAMPLE_REQUESTS:
        request = await registry.create(
            item=sample["item"],
            requester_name=sample["requester_name"],
            location=sample["location"],
            priority=sample["priority"],
            phone=sample["phone"],
        )
        target = RequestStatus(sample["status"])
        if target in (RequestStatus.delivering, RequestStatus.completed):
            request = await registry.claim(request.id, sample["delivery_person_id"])
        if target == RequestStatus.completed:
            request = await registry.complete(request.id, sample["delivery_person_id"])
        seeded.append(request)
    return seeded


async def main(argv: Optional[List[str]] = None) -> List[DeliveryRequest]:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[1])
    parser.add_argument("--backend", choices=["memory", "mongo"], default=None)
    args = parser.parse_args(argv)

    settings = get_settings()
    if args.backend:
        settings = settings.model_copy(update={"store_backend": args.backend})
    configure_logging(settings.log_level)

    registry = build_registry(settings)
    seeded = await seed(registry)
    for request in seeded:
        log.info(
            "Seeded %s: %s for %s [%s, %s]",
            request.id, request.item, request.requester_name,
            request.priority.value, request.status.value,
        )
    return seeded


if __name__ == "__main__":
    asyncio.run(main())
