"""CTC breakup: earnings split, statutory deductions and take-home pay."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Optional

from ..enums import TaxRegime
from ..errors import ValidationError
from . import statutory
from .income_tax import annual_income_tax

COMPONENT_LABELS = {
    "basic": "Basic Salary",
    "hra": "House Rent Allowance (HRA)",
    "da": "Dearness Allowance (DA)",
    "lta": "Leave Travel Allowance (LTA)",
    "special": "Special Allowance",
    "performance": "Performance Bonus",
}

# Components with a fixed share of gross; special allowance absorbs the rest.
FIXED_COMPONENTS = ("basic", "hra", "da", "lta", "performance")


@dataclass
class ComponentPercentages:
    basic: float = 50
    hra: float = 20
    da: float = 10
    lta: float = 5
    special: float = 10
    performance: float = 5

    def fixed_total(self) -> float:
        return sum(getattr(self, name) for name in FIXED_COMPONENTS)


@dataclass
class DeductionOptions:
    epf: bool = True
    prof_tax: bool = True
    esi: bool = True
    mlwf: bool = True
    metro_city: bool = True


@dataclass
class CTCInput:
    amount: float = 50000
    is_yearly: bool = False
    tax_regime: TaxRegime = TaxRegime.NEW
    percentages: ComponentPercentages = field(default_factory=ComponentPercentages)
    options: DeductionOptions = field(default_factory=DeductionOptions)
    month: Optional[int] = None


@dataclass
class Earnings:
    basic: float
    hra: float
    da: float
    lta: float
    performance: float
    special: float
    gross: float


@dataclass
class Deductions:
    esic: int
    pf: int
    professional_tax: int
    mlwf: int
    income_tax: float
    total: float


@dataclass
class EmployerCost:
    esic: int
    pf: int
    mlwf: int
    total: int


@dataclass
class CTCBreakup:
    monthly_ctc: float
    annual_ctc: float
    tax_regime: TaxRegime
    month: int
    earnings: Earnings
    deductions: Deductions
    employer: EmployerCost
    net_monthly: float
    net_yearly: float

    def to_dict(self) -> dict:
        data = asdict(self)
        data["tax_regime"] = self.tax_regime.value
        return data


def _validate(data: CTCInput) -> None:
    if data.amount < 0:
        raise ValidationError("CTC amount cannot be negative")
    try:
        TaxRegime(data.tax_regime)
    except ValueError as exc:
        raise ValidationError(f"Unknown tax regime '{data.tax_regime}'") from exc
    pct = data.percentages
    for name in COMPONENT_LABELS:
        if getattr(pct, name) < 0:
            raise ValidationError(f"{COMPONENT_LABELS[name]} percentage cannot be negative")
    if pct.fixed_total() > 100:
        raise ValidationError("Salary components exceed 100% of gross")
    if data.month is not None and not 1 <= data.month <= 12:
        raise ValidationError(f"Month must be between 1 and 12, got {data.month}")


def calculate_ctc(data: CTCInput) -> CTCBreakup:
    """Split a CTC into earnings, deductions and net pay for one month."""

    _validate(data)
    regime = TaxRegime(data.tax_regime)
    month = data.month or date.today().month
    opts = data.options
    pct = data.percentages

    monthly = data.amount / 12 if data.is_yearly else data.amount
    annual = monthly * 12
    gross = monthly

    parts = {name: gross * getattr(pct, name) / 100 for name in FIXED_COMPONENTS}
    special = max(0.0, gross - sum(parts.values()))
    earnings = Earnings(special=special, gross=gross, **parts)

    esic_emp, esic_er = statutory.esic_contribution(gross, opts.esi)
    pf_emp, pf_er = statutory.pf_contribution(earnings.basic, opts.epf)
    pt = statutory.professional_tax(opts.prof_tax)
    mlwf_emp, mlwf_er = statutory.mlwf_contribution(month, opts.mlwf)
    income_tax = annual_income_tax(annual, regime, pf_emp) / 12

    total = esic_emp + pf_emp + pt + mlwf_emp + income_tax
    deductions = Deductions(
        esic=esic_emp,
        pf=pf_emp,
        professional_tax=pt,
        mlwf=mlwf_emp,
        income_tax=income_tax,
        total=total,
    )
    employer = EmployerCost(esic=esic_er, pf=pf_er, mlwf=mlwf_er, total=esic_er + pf_er + mlwf_er)

    net_monthly = monthly - total
    return CTCBreakup(
        monthly_ctc=monthly,
        annual_ctc=annual,
        tax_regime=regime,
        month=month,
        earnings=earnings,
        deductions=deductions,
        employer=employer,
        net_monthly=net_monthly,
        net_yearly=net_monthly * 12,
    )


def salary_structure(settings) -> list[dict]:
    """Active salary components as shown on the structure page."""

    return [
        {"name": "Basic Salary", "type": "Earning", "value": f"{settings.basic_salary_percentage:g}%", "taxable": True},
        {"name": "House Rent Allowance (HRA)", "type": "Earning", "value": f"{settings.hra_percentage:g}%", "taxable": False},
        {"name": "Dearness Allowance (DA)", "type": "Earning", "value": f"{settings.da_percentage:g}%", "taxable": True},
        {"name": "PF (Employee)", "type": "Deduction", "value": f"{settings.epf_percentage:g}%", "taxable": False},
        {"name": "ESIC", "type": "Deduction", "value": f"{settings.esic_percentage:g}%", "taxable": False},
        {"name": "Professional Tax", "type": "Deduction", "value": f"₹{settings.professional_tax:g}", "taxable": False},
    ]
