# app/modules/transactions/discount_service.py
from decimal import Decimal
from math import isqrt
from typing import List, Tuple

from .schemas import DiscountResult

# (inclusive upper bound in cents, base percentage). MYR 1 = 100 cents.
BASE_DISCOUNT_TIERS: List[Tuple[int, Decimal]] = [
    (50000, Decimal("0")),      # up to MYR 500
    (100000, Decimal("3")),     # MYR 501 - 1,000
    (500000, Decimal("5")),     # MYR 1,001 - 5,000
    (1000000, Decimal("7")),    # MYR 5,001 - 10,000
    (5000000, Decimal("10")),   # MYR 10,001 - 50,000
]
TOP_TIER_DISCOUNT = Decimal("15")  # above MYR 50,000

PRIME_BONUS = Decimal("8")
PRIME_BONUS_MIN_MYR = 500
ENDS_IN_FIVE_BONUS = Decimal("10")
ENDS_IN_FIVE_MIN_MYR = 900

DEFAULT_MAX_DISCOUNT = Decimal("20")

# Trial division up to this bound; above it, Miller-Rabin with the first twelve
# prime bases, which is exact for every n below 3.3 * 10**24
TRIAL_DIVISION_LIMIT = 10 ** 12
MILLER_RABIN_BASES = (2, 3, 5, 7, 11, 13, 17, 19, 23, 29, 31, 37)


def _is_strong_probable_prime(number: int, base: int) -> bool:
    exponent, shifts = number - 1, 0
    while exponent % 2 == 0:
        exponent //= 2
        shifts += 1

    value = pow(base, exponent, number)
    if value in (1, number - 1):
        return True
    for _ in range(shifts - 1):
        value = pow(value, 2, number)
        if value == number - 1:
            return True
    return False


def is_prime(number: int) -> bool:
    if number <= 1:
        return False
    if number == 2:
        return True
    if number % 2 == 0:
        return False

    if number < TRIAL_DIVISION_LIMIT:
        for divisor in range(3, isqrt(number) + 1, 2):
            if number % divisor == 0:
                return False
        return True

    for base in MILLER_RABIN_BASES:
        if number % base == 0:
            return False
        if not _is_strong_probable_prime(number, base):
            return False
    return True


def ends_in_five(number: int) -> bool:
    return number % 10 == 5


class DiscountCalculatorService:
    """Tiered discount with conditional bonuses, capped at ``max_discount``"""

    def __init__(self, max_discount: Decimal = DEFAULT_MAX_DISCOUNT):
        self.max_discount = Decimal(max_discount)

    def calculate_discount(self, total_amount: int) -> DiscountResult:
        """Discount for ``total_amount`` cents.

        1. Base tier from the amount in cents
        2. Conditional bonuses on the amount in whole MYR (cents // 100)
        3. Cap the total percentage
        4. Discount amount is truncated to whole cents
        """
        amount_in_myr = total_amount // 100

        percentage = self.calculate_base_discount(total_amount)
        percentage += self.calculate_conditional_discounts(amount_in_myr)

        if percentage > self.max_discount:
            percentage = self.max_discount

        # Exact rational arithmetic; floor equals truncation for positive amounts
        numerator, denominator = percentage.as_integer_ratio()
        discount_amount = total_amount * numerator // (denominator * 100)
        final_amount = total_amount - discount_amount

        return DiscountResult(
            percentage=percentage,
            discount_amount=discount_amount,
            final_amount=final_amount
        )

    @staticmethod
    def calculate_base_discount(total_amount: int) -> Decimal:
        for upper_bound, percentage in BASE_DISCOUNT_TIERS:
            if total_amount <= upper_bound:
                return percentage
        return TOP_TIER_DISCOUNT

    @staticmethod
    def calculate_conditional_discounts(amount_in_myr: int) -> Decimal:
        conditional = Decimal("0")

        if amount_in_myr > PRIME_BONUS_MIN_MYR and is_prime(amount_in_myr):
            conditional += PRIME_BONUS

        if amount_in_myr > ENDS_IN_FIVE_MIN_MYR and ends_in_five(amount_in_myr):
            conditional += ENDS_IN_FIVE_BONUS

        return conditional
