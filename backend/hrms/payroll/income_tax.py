"""Annual income tax under the old and new regimes."""
from __future__ import annotations

from ..enums import TaxRegime
from ..errors import ValidationError

CESS_RATE = 0.04

NEW_REGIME_STANDARD_DEDUCTION = 75000
NEW_REGIME_REBATE_LIMIT = 1200000
# (lower bound, upper bound or None, rate)
NEW_REGIME_SLABS = (
    (400000, 800000, 0.05),
    (800000, 1200000, 0.10),
    (1200000, 1600000, 0.15),
    (1600000, 2000000, 0.20),
    (2000000, 2400000, 0.25),
    (2400000, None, 0.30),
)

OLD_REGIME_STANDARD_DEDUCTION = 50000
OLD_REGIME_OTHER_80C = 100000
OLD_REGIME_80C_CAP = 150000
OLD_REGIME_REBATE_LIMIT = 500000
OLD_REGIME_SLABS = (
    (250000, 500000, 0.05),
    (500000, 1000000, 0.20),
    (1000000, None, 0.30),
)


def slab_tax(taxable: float, slabs) -> float:
    """Progressive tax across ``slabs`` before cess."""

    tax = 0.0
    for lower, upper, rate in slabs:
        if taxable <= lower:
            continue
        top = taxable if upper is None else min(taxable, upper)
        tax += (top - lower) * rate
    return tax


def taxable_income(annual_income: float, regime: TaxRegime, pf_employee_monthly: float = 0) -> float:
    if regime is TaxRegime.NEW:
        return max(0.0, annual_income - NEW_REGIME_STANDARD_DEDUCTION)
    deductions = min(pf_employee_monthly * 12 + OLD_REGIME_OTHER_80C, OLD_REGIME_80C_CAP)
    return max(0.0, annual_income - OLD_REGIME_STANDARD_DEDUCTION - deductions)


def annual_income_tax(
    annual_income: float,
    regime: TaxRegime | str = TaxRegime.NEW,
    pf_employee_monthly: float = 0,
) -> float:
    """Tax payable for the year, including 4% health and education cess.

    Income at or below the rebate limit of the regime pays nothing. Under the
    old regime the employee's PF counts towards the 80C deduction.
    """

    try:
        regime = TaxRegime(regime)
    except ValueError as exc:
        raise ValidationError(f"Unknown tax regime '{regime}'") from exc

    taxable = taxable_income(annual_income, regime, pf_employee_monthly)
    if regime is TaxRegime.NEW:
        if taxable <= NEW_REGIME_REBATE_LIMIT:
            return 0.0
        tax = slab_tax(taxable, NEW_REGIME_SLABS)
    else:
        if taxable <= OLD_REGIME_REBATE_LIMIT:
            return 0.0
        tax = slab_tax(taxable, OLD_REGIME_SLABS)
    return tax * (1 + CESS_RATE)
