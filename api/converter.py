from errors import InvalidInput, RateUnavailable
from rate_fetcher import RateFetcher


def validate(source: str, target: str, amount: float) -> None:
    """
    Check the conversion inputs before any rate lookup happens.

    Raises:
        InvalidInput: For the first of source, target, amount that is invalid.
    """
    if not source or not source.strip():
        raise InvalidInput("source", "Source currency must be provided")
    if not target or not target.strip():
        raise InvalidInput("target", "Target currency must be provided")
    if not amount > 0:  # also rejects NaN
        raise InvalidInput("amount", "Amount must be greater than zero")


class CurrencyConverter:
    def __init__(self, fetcher: RateFetcher):
        self._fetcher = fetcher

    async def convert(self, source: str, target: str, amount: float) -> float:
        """
        Validate input, fetch rate, and perform currency conversion.

        Converting a currency into itself returns the amount as-is without
        asking the fetcher.

        Raises:
            ConversionError: A subclass describing why the conversion failed.
        """
        validate(source, target, amount)

        if source == target:
            return amount

        rate = await self._fetcher.fetch_rate(source, target)
        if rate is None:
            raise RateUnavailable()
        return rate * amount
