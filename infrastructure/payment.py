"""Simulated payment gateway"""
import asyncio
from decimal import Decimal

from domain.payment import PaymentGateway
from infrastructure.logger import get_logger


logger = get_logger(__name__)


class SimulatedPaymentGateway(PaymentGateway):
    """Stand-in for a real processor; approves (or declines) every charge"""

    def __init__(self, approve: bool = True, delay_seconds: float = 0.0):
        self.approve = approve
        self.delay_seconds = delay_seconds
        self.charges = 0

    async def charge(self, amount: Decimal) -> bool:
        """Simulate a charge"""
        logger.info("Processing payment of $%.2f", amount)
        self.charges += 1
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)

        if self.approve:
            logger.info("Payment of $%.2f approved", amount)
        else:
            logger.warning("Payment of $%.2f declined", amount)
        return self.approve
