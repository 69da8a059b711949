"""
Birthday announcement Celery task.

Task: announce_birthdays()

Dependencies: firefli.application, firefli.workers
System role: Scheduled birthday trigger
"""

import asyncio

from firefli.application.services import BirthdayService
from firefli.workers import celery_app
from firefli.workers.runtime import worker_context


async def run_birthdays(context_factory=worker_context) -> dict:
    """Run the birthday pass with task-owned resources."""
    async with context_factory() as context:
        async with context.session_factory() as db:
            service = BirthdayService(db, context.dispatcher(db), context.settings.sessions)
            response = await service.announce()
    return response.model_dump()


@celery_app.task(name="firefli.announce_birthdays")
def announce_birthdays() -> dict:
    """Announce today's birthdays for every workspace."""
    return asyncio.run(run_birthdays())
