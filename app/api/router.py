"""
Main API router
"""
from fastapi import APIRouter

from app.api.v1 import (
    health,
    version,
    auth,
    employees,
    sites,
    employee_locations,
    work_records,
    payroll,
    timesheets,
    invoices,
    tasks,
    reminders,
)

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(version.router, tags=["version"])
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(employees.router, prefix="/employees", tags=["employees"])
api_router.include_router(sites.router, prefix="/sites", tags=["sites"])
api_router.include_router(employee_locations.router, prefix="/employee-locations", tags=["employee-locations"])
api_router.include_router(work_records.router, prefix="/work-records", tags=["work-records"])
api_router.include_router(payroll.router, prefix="/payroll", tags=["payroll"])
api_router.include_router(timesheets.router, prefix="/timesheets", tags=["timesheets"])
api_router.include_router(invoices.router, prefix="/invoices", tags=["invoices"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(reminders.router, prefix="/reminders", tags=["reminders"])
