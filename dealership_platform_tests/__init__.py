"""
dealership_platform tests

Covers the three services of the platform:

- Auth Service: login and token verification (`test_auth.py`)
- User Service: user CRUD and pagination (`test_users.py`)
- Vehicle Service: the remote authorization gate and vehicle CRUD
  (`test_gate.py`, `test_vehicles.py`)
- The shared CRUD controller and result mapping (`test_crud.py`, `test_results.py`)
"""
