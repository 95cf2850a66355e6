"""
Express (mobile money) payment example. The customer approves the payment on
their phone; the instructions say how.
"""
import asyncio
import logging
import uuid
from decimal import Decimal

from paynow_sdk import ClientConfig, PaynowClient
from paynow_sdk.payments import Ecocash


async def run():
    logging.basicConfig(level=logging.INFO)
    config = ClientConfig.from_env()
    async with PaynowClient.from_config(config) as client:
        payment = client.express_payment(
            method=Ecocash(phone="0771111111"),
            reference="c1dfbc5b-9e5b-40bf-846e-22006078a436",
            amount=Decimal("30000.00"),
            result_url="https://example.net",
            auth_email="billing@example.net",
            merchant_trace=uuid.uuid4().hex,
        )
        response = await client.submit(payment)
        print("Instructions:", response.instructions)
        print("Paynow reference:", response.paynow_reference)


if __name__ == "__main__":
    asyncio.run(run())
