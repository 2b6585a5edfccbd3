"""Credit ledger domain service."""

import logfire

from gate.domain.error import InsufficientCreditError, NotFoundError, ValidationError
from gate.domain.repository import ResellerRepository
from gate.domain.value import AccessCode


class CreditService:
    """Reseller credit balances.

    Every balance change is a single conditional statement in the store;
    the service never reads a balance to decide a write.
    """

    def __init__(self, reseller_repository: ResellerRepository) -> None:
        """Initialize credit service.

        Args:
            reseller_repository: Reseller repository
        """
        self.reseller_repository = reseller_repository

    async def try_debit(self, reseller_code: AccessCode, amount: int = 1) -> int:
        """Take credits from a reseller if the balance covers them.

        Args:
            reseller_code: Reseller to debit
            amount: Number of credits

        Returns:
            Remaining balance

        Raises:
            ValidationError: If amount is not positive
            InsufficientCreditError: If the balance is too small
        """
        if amount <= 0:
            raise ValidationError("Debit amount must be positive")

        with logfire.span(
            "credit_service.try_debit", reseller_code=reseller_code.root, amount=amount
        ):
            balance = await self.reseller_repository.try_debit(reseller_code, amount)
            if balance is None:
                logfire.warn(
                    "Insufficient credit",
                    reseller_code=reseller_code.root,
                    amount=amount,
                )
                raise InsufficientCreditError(reseller_code.root, amount)

            logfire.info(
                "Credit debited",
                reseller_code=reseller_code.root,
                amount=amount,
                balance=balance,
            )
            return balance

    async def credit(self, reseller_code: AccessCode, amount: int) -> int:
        """Add credits to a reseller.

        Args:
            reseller_code: Reseller to credit
            amount: Number of credits

        Returns:
            New balance

        Raises:
            ValidationError: If amount is not positive
            NotFoundError: If the reseller does not exist
        """
        if amount <= 0:
            raise ValidationError("Credit amount must be a positive integer")

        with logfire.span(
            "credit_service.credit", reseller_code=reseller_code.root, amount=amount
        ):
            balance = await self.reseller_repository.credit(reseller_code, amount)
            if balance is None:
                raise NotFoundError("Reseller", reseller_code.root)

            logfire.info(
                "Credit added",
                reseller_code=reseller_code.root,
                amount=amount,
                balance=balance,
            )
            return balance
