# Routes package init
"""
HRMS Backend — API Routes Package
===================================

Route Inventory:
    - employees.py:  GET/POST   /employee
                     PUT/DELETE /employee/{id}
    - health.py:     GET        /health

Routes handle HTTP concerns only (body, path id, status codes) and delegate
to EmployeeService.
"""
