"""Statutory contribution rules (PF, ESIC, PT, MLWF, bonus).

All amounts are monthly rupees. Contributions are rounded half-up to the
whole rupee, the way they appear on challans and payslips.
"""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

PF_WAGE_CEILING = 15000
PF_EMPLOYEE_RATE = 0.12
PF_EMPLOYER_RATE = 0.13

ESIC_WAGE_LIMIT = 21000
ESIC_EMPLOYEE_RATE = 0.0075
ESIC_EMPLOYER_RATE = 0.0325

PROFESSIONAL_TAX = 200

# MLWF is deducted twice a year, in June and December.
MLWF_MONTHS = (6, 12)
MLWF_EMPLOYEE = 25
MLWF_EMPLOYER = 75

BONUS_BASIC_SHARE = 0.5
BONUS_WAGE_CEILING = 7000
BONUS_RATE = 0.0833


def round_half_up(value: float) -> int:
    """Round to the nearest rupee, halves going up."""

    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def pf_contribution(basic: float, enabled: bool = True) -> tuple[int, int]:
    """Employee and employer PF on basic, capped at the wage ceiling."""

    if not enabled:
        return 0, 0
    wage = min(basic, PF_WAGE_CEILING)
    return round_half_up(wage * PF_EMPLOYEE_RATE), round_half_up(wage * PF_EMPLOYER_RATE)


def esic_applicable(gross: float) -> bool:
    return gross <= ESIC_WAGE_LIMIT


def esic_contribution(gross: float, enabled: bool = True) -> tuple[int, int]:
    """Employee and employer ESIC; nothing above the wage limit."""

    if not enabled or not esic_applicable(gross):
        return 0, 0
    return round_half_up(gross * ESIC_EMPLOYEE_RATE), round_half_up(gross * ESIC_EMPLOYER_RATE)


def professional_tax(enabled: bool = True) -> int:
    return PROFESSIONAL_TAX if enabled else 0


def is_mlwf_month(month: int) -> bool:
    return month in MLWF_MONTHS


def mlwf_contribution(month: int, enabled: bool = True) -> tuple[int, int]:
    """Employee and employer MLWF for a payroll month."""

    if enabled and is_mlwf_month(month):
        return MLWF_EMPLOYEE, MLWF_EMPLOYER
    return 0, 0


def bonus_for_month(monthly_ctc: float) -> tuple[int, int]:
    """Monthly basic wages and the statutory bonus earned on them."""

    monthly_basic = round_half_up(monthly_ctc * BONUS_BASIC_SHARE)
    eligible = min(monthly_basic, BONUS_WAGE_CEILING)
    return monthly_basic, round_half_up(eligible * BONUS_RATE)
