"""
Standard payment example. Set PAYNOW_INTEGRATION_ID and PAYNOW_INTEGRATION_KEY
in the environment, then open the returned browser URL to pay.
"""
import asyncio
import logging
from decimal import Decimal

from paynow_sdk import ClientConfig, PaynowClient


async def run():
    logging.basicConfig(level=logging.INFO)
    config = ClientConfig.from_env()
    async with PaynowClient.from_config(config) as client:
        payment = client.standard_payment(
            reference="c1dfbc5b-9e5b-40bf-846e-22006078a436",
            amount=Decimal("31418.74"),
            return_url="https://example.net",
            result_url="https://example.net",
        )
        response = await client.submit(payment)
        print("Browser URL:", response.browser_url)
        print("Poll URL:", response.poll_url)


if __name__ == "__main__":
    asyncio.run(run())
