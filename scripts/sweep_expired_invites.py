#!/usr/bin/env python3
"""Delete single-use invites past their expiry.

Meant to run on a schedule (cron, Cloud Scheduler or similar).
"""

import asyncio
import sys

import logfire

from roster.application.usecase.maintenance import (
    SweepExpiredInvitesRequest,
    SweepExpiredInvitesUseCase,
)
from roster.config import Settings
from roster.util.di.container import create_container
from roster.util.observability import configure_logfire


async def sweep() -> int:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(SweepExpiredInvitesUseCase)
            response = await use_case.execute(SweepExpiredInvitesRequest())
            return response.deleted
    finally:
        await container.close()


def main() -> int:
    """Run the sweep and log any errors to Logfire."""
    configure_logfire(Settings())

    try:
        deleted = asyncio.run(sweep())
        logfire.info("Expired invite sweep finished", deleted=deleted)
        return 0
    except Exception as e:
        logfire.error(
            "Expired invite sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
