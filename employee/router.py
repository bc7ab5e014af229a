from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from core.database import get_db
from .schema import (
    EmployeeCreated,
    EmployeeDetail,
    EmployeeList,
    EmployeePayload,
    EmployeeSearchResult,
    EmployeeStats,
)
from . import service

employee_router = APIRouter(prefix="/employees", tags=["Employees"])

# List employees, paged when both page and limit are given
@employee_router.get("", response_model=EmployeeList)
def list_employees(
    page: Optional[int] = Query(None, ge=1),
    limit: Optional[int] = Query(None, ge=1, le=500),
    db: Session = Depends(get_db),
):
    return service.list_employees(db, page=page, limit=limit)

# Search across name, email, id, job title and department name
@employee_router.get("/search", response_model=EmployeeSearchResult)
def search_employees(q: Optional[str] = None, db: Session = Depends(get_db)):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail='Search query parameter "q" is required')
    return {"data": service.search_employees(db, q.strip())}

@employee_router.get("/stats", response_model=EmployeeStats)
def employee_stats(db: Session = Depends(get_db)):
    return service.employee_stats(db)

# Get employee by id
@employee_router.get("/{employee_id}", response_model=EmployeeDetail)
def employee_detail(employee_id: int, db: Session = Depends(get_db)):
    row = service.get_employee(db, employee_id)
    if not row:
        raise HTTPException(status_code=404, detail="Employee not found")
    return {"data": row}

# Create employee
@employee_router.post("", response_model=EmployeeCreated, status_code=status.HTTP_201_CREATED)
def employee_post(payload: EmployeePayload, db: Session = Depends(get_db)):
    service.create_employee(db, payload)
    return {"message": "Employee created successfully", "data": {"email": payload.email}}

# Hire through the stored routine
@employee_router.post("/hire", response_model=EmployeeCreated, status_code=status.HTTP_201_CREATED)
def employee_hire(payload: EmployeePayload, db: Session = Depends(get_db)):
    service.hire_employee(db, payload)
    return {"message": "Employee hired successfully", "data": {"email": payload.email}}

# Update employee (full row)
@employee_router.put("/{employee_id}")
def employee_put(employee_id: int, payload: EmployeePayload, db: Session = Depends(get_db)):
    service.update_employee(db, employee_id, payload)
    return {"message": "Employee updated successfully"}

# Delete employee
@employee_router.delete("/{employee_id}")
def employee_delete(employee_id: int, db: Session = Depends(get_db)):
    service.delete_employee(db, employee_id)
    return {"message": "Employee deleted successfully"}
