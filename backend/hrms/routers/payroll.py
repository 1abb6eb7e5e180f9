"""CTC calculator and salary structure."""
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..dependencies import get_current_user, get_db_session
from ..models import User
from ..payroll.ctc import ComponentPercentages, CTCInput, DeductionOptions, calculate_ctc, salary_structure
from ..schemas import CTCRequest
from .settings import load_system_settings

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.post("/ctc")
async def ctc_breakup(payload: CTCRequest, current_user: User = Depends(get_current_user)) -> dict:
    """Monthly earnings, deductions and take-home for a CTC."""

    data = CTCInput(
        amount=payload.amount,
        is_yearly=payload.is_yearly,
        tax_regime=payload.tax_regime,
        percentages=ComponentPercentages(**payload.percentages.model_dump()),
        options=DeductionOptions(**payload.options.model_dump()),
        month=payload.month,
    )
    return calculate_ctc(data).to_dict()


@router.get("/structure")
async def get_salary_structure(
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_db_session),
) -> list[dict]:
    settings = await load_system_settings(session, current_user.account_id)
    return salary_structure(settings)
