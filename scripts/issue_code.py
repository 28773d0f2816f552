#!/usr/bin/env python3
"""Mint a redemption code from the command line.

Usage:
    python scripts/issue_code.py 30

Prompts for the duration when it is not given. Codes minted here are
audited with no actor.
"""

import argparse
import asyncio
import sys

from gate.application.usecase.code import (
    IssueCodeOutcome,
    IssueCodeRequest,
    IssueCodeUseCase,
)
from gate.config import Settings
from gate.domain.model.common import utcnow
from gate.util.di.container import create_container
from gate.util.logging import setup_logging
from gate.util.observability import configure_logfire


async def issue(days: int) -> int:
    """Mint one code and print it.

    Args:
        days: Duration class in days

    Returns:
        Process exit code
    """
    container = create_container()
    try:
        async with container() as request_container:
            use_case = await request_container.get(IssueCodeUseCase)
            response = await use_case.execute(
                IssueCodeRequest(duration_days=days, now=utcnow())
            )
    finally:
        await container.close()

    print(response.message)
    return 0 if response.outcome == IssueCodeOutcome.ISSUED else 1


def main() -> int:
    parser = argparse.ArgumentParser(description="Mint a subscription code")
    parser.add_argument("days", nargs="?", type=int, help="15, 30 or 60")
    args = parser.parse_args()

    days = args.days
    if days is None:
        answer = input("Subscription duration in days (15 / 30 / 60): ").strip()
        days = int(answer) if answer.isdigit() else 0

    settings = Settings()
    setup_logging(settings)
    configure_logfire(settings)

    return asyncio.run(issue(days))


if __name__ == "__main__":
    sys.exit(main())
