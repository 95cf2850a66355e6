"""
Initiate a payment, then poll its status once.
"""
import asyncio
import logging
from decimal import Decimal

from paynow_sdk import PaynowClient


async def run():
    logging.basicConfig(level=logging.INFO)
    async with PaynowClient.from_env() as client:
        payment = client.standard_payment(
            reference="c1dfbc5b-9e5b-40bf-846e-22006078a436",
            amount=Decimal("31418.74"),
            return_url="https://example.net",
            result_url="https://example.net",
        )
        response = await client.submit(payment)
        update = await client.poll_status(response.poll_url)
        print(f"Status: {update.status.value} (paid: {update.status.is_paid})")


if __name__ == "__main__":
    asyncio.run(run())
