#!/usr/bin/env python3
"""Recompute seat counters of every active PRO from live membership."""

import asyncio
import sys

import logfire

from roster.application.usecase.maintenance import (
    ReconcileSeatsRequest,
    ReconcileSeatsResponse,
    ReconcileSeatsUseCase,
)
from roster.config import Settings
from roster.util.di.container import create_container
from roster.util.observability import configure_logfire


async def reconcile() -> ReconcileSeatsResponse:
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(ReconcileSeatsUseCase)
            return await use_case.execute(ReconcileSeatsRequest())
    finally:
        await container.close()


def main() -> int:
    """Run reconciliation and log any errors to Logfire."""
    configure_logfire(Settings())

    try:
        response = asyncio.run(reconcile())
        print(f"Checked {response.checked} teams, corrected {len(response.changed)}")
        return 0
    except Exception as e:
        logfire.error(
            "Seat reconciliation failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())
