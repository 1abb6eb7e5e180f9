"""Indian statutory payroll calculations."""
from .bonus import BonusRegister, bonus_register
from .ctc import CTCBreakup, CTCInput, calculate_ctc, salary_structure
from .income_tax import annual_income_tax
from .mlwf import MlwfStatement, mlwf_statement

__all__ = [
    "BonusRegister",
    "CTCBreakup",
    "CTCInput",
    "MlwfStatement",
    "annual_income_tax",
    "bonus_register",
    "calculate_ctc",
    "mlwf_statement",
    "salary_structure",
]
