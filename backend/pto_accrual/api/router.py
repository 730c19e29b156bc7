from fastapi import APIRouter

from pto_accrual.api.accruals import accrual_trigger_router
from pto_accrual.api.balances import balance_router
from pto_accrual.api.pay_periods import pay_periods_router

api_router = APIRouter()
api_router.include_router(accrual_trigger_router)
api_router.include_router(pay_periods_router)
api_router.include_router(balance_router)
