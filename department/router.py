from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from core.database import get_db
from .schema import (
    DepartmentCreated,
    DepartmentDetail,
    DepartmentEmployees,
    DepartmentList,
    DepartmentPayload,
    DepartmentStats,
)
from . import service

department_router = APIRouter(prefix="/departments", tags=["Departments"])

# List departments
@department_router.get("", response_model=DepartmentList)
def list_departments(db: Session = Depends(get_db)):
    return {"data": service.list_departments(db)}

@department_router.get("/search", response_model=DepartmentList)
def search_departments(q: Optional[str] = None, db: Session = Depends(get_db)):
    if not q or not q.strip():
        raise HTTPException(status_code=400, detail='Search query parameter "q" is required')
    return {"data": service.search_departments(db, q.strip())}

@department_router.get("/stats", response_model=DepartmentStats)
def department_stats(db: Session = Depends(get_db)):
    return service.department_stats(db)

# Get department by id, with location detail
@department_router.get("/{department_id}", response_model=DepartmentDetail)
def department_detail(department_id: int, db: Session = Depends(get_db)):
    row = service.get_department(db, department_id)
    if not row:
        raise HTTPException(status_code=404, detail="Department not found")
    return {"data": row}

@department_router.get("/{department_id}/employees", response_model=DepartmentEmployees)
def department_employees(department_id: int, db: Session = Depends(get_db)):
    return {"data": service.department_employees(db, department_id)}

# Create department
@department_router.post("", response_model=DepartmentCreated, status_code=status.HTTP_201_CREATED)
def department_post(payload: DepartmentPayload, db: Session = Depends(get_db)):
    service.create_department(db, payload)
    return {"message": "Department created successfully", "data": {"departmentName": payload.department_name}}

# Update department (full row)
@department_router.put("/{department_id}")
def department_put(department_id: int, payload: DepartmentPayload, db: Session = Depends(get_db)):
    service.update_department(db, department_id, payload)
    return {"message": "Department updated successfully"}

# Delete department, refused while employees belong to it
@department_router.delete("/{department_id}")
def department_delete(department_id: int, db: Session = Depends(get_db)):
    service.delete_department(db, department_id)
    return {"message": "Department deleted successfully"}
