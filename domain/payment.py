"""Domain Payment Interface"""
from abc import ABC, abstractmethod
from decimal import Decimal


class PaymentGateway(ABC):
    """External capability charged once per reservation attempt.

    No idempotency key is passed, so a retried charge is not deduplicated.
    """

    @abstractmethod
    async def charge(self, amount: Decimal) -> bool:
        """Charge the amount; True on success"""
        pass
