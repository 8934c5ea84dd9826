from __future__ import annotations

import asyncio
import logging
import sys

import httpx

import aretry
from aretry.backoff import ConstantBackoff
from aretry.context import BaseContext
from aretry.options import max_retries, with_backoff

logger: logging.Logger = logging.getLogger(__name__)

TEST_URL = "https://api.example.com/data"


def flaky_handler() -> httpx.MockTransport:
    responses = [503]

    def handler(request: httpx.Request) -> httpx.Response:
        if responses:
            return httpx.Response(responses.pop(), request=request)
        return httpx.Response(200, request=request)

    return httpx.MockTransport(handler)


def check_execute() -> None:
    logger.info("Checking execute...")
    with httpx.Client(transport=flaky_handler()) as client:
        response = aretry.execute(
            lambda ctx: client.get(TEST_URL).raise_for_status(),
            max_retries(2),
            with_backoff(ConstantBackoff(0.01)),
        )
    assert response.status_code == 200


def check_execute_async() -> None:
    logger.info("Checking execute_async...")

    async def run() -> httpx.Response:
        async with httpx.AsyncClient(transport=flaky_handler()) as client:

            async def fetch(ctx: BaseContext) -> httpx.Response:  # noqa: ARG001
                response = await client.get(TEST_URL)
                return response.raise_for_status()

            return await aretry.execute_async(
                fetch, max_retries(2), with_backoff(ConstantBackoff(0.01))
            )

    assert asyncio.run(run()).status_code == 200


def main() -> None:
    r"""Run all package checks to validate installation and
    functionality."""
    try:
        check_execute()
        check_execute_async()

        logger.info("✅ All package checks passed successfully!")
    except Exception:
        logger.exception("❌ Package check failed")
        sys.exit(1)


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    main()
