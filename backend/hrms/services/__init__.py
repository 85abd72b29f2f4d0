# Services package init
"""
HRMS Backend — Services Layer
===============================

Service Inventory:
    - EmployeeStore (abstract): persistence contract for employee records
    - MongoEmployeeStore: EmployeeStore over a pymongo AsyncCollection
    - EmployeeService: list/create/update/delete with error translation
"""
