from fastapi import APIRouter

from fakebooks.api.routes import customers, deposits, invoices, login, utils, workers

api_router = APIRouter()
api_router.include_router(login.router, tags=["login"])
api_router.include_router(utils.router, tags=["utils"])
api_router.include_router(invoices.router, prefix="/sales/invoices", tags=["invoices"])
api_router.include_router(customers.router, prefix="/sales/customers", tags=["customers"])
api_router.include_router(deposits.router, prefix="/sales/deposits", tags=["deposits"])
api_router.include_router(workers.router, prefix="/workers", tags=["workers"])
