import asyncio
from typing import List, Sequence, Tuple

from config import logger
from api.base import EvidenceAdapter
from models.claims import Claim, ClaimCategory
from models.evidence import EvidenceResult

Job = Tuple[EvidenceAdapter, Claim]


async def dispatch_queries(
    jobs: Sequence[Job],
    category: ClaimCategory,
    timeout: float
) -> List[Tuple[Claim, List[EvidenceResult]]]:
    """
    Run every (adapter, claim) query concurrently and settle all of them.

    Queries still running when the timeout elapses are cancelled and their
    results discarded. Results are returned in job order.
    """
    if not jobs:
        logger.warning("No adapter queries to dispatch.")
        return []

    tasks = [
        asyncio.create_task(adapter.query(claim, category), name=f"{adapter.source_id}:{i}")
        for i, (adapter, claim) in enumerate(jobs)
    ]
    done, pending = await asyncio.wait(tasks, timeout=timeout)

    for task in pending:
        task.cancel()
    if pending:
        logger.warning(
            f"Pipeline timeout after {timeout}s, abandoning {len(pending)} adapter call(s): "
            f"{', '.join(t.get_name() for t in pending)}"
        )
        await asyncio.gather(*pending, return_exceptions=True)

    processed_results = []
    for task, (adapter, claim) in zip(tasks, jobs):
        if task not in done:
            continue
        exc = task.exception()
        if exc is not None:
            logger.error(f"Error during {adapter.source_id} query: {exc}", exc_info=exc)
            continue
        processed_results.append((claim, task.result()))
    return processed_results
