"""Infrastructure layer — external system integration.

This layer wraps all interaction with SQLAlchemy and the database
driver.  Every raw third-party exception must be caught here and
re-raised as an :class:`~employee_tracker.exceptions.EmployeeTrackerError`
subclass.

Rules
-----
* No imports from ``cli``.
* No user-facing output (no ``print()``, no Rich rendering).
* Must expose clean, typed interfaces consumed by the core layer.
"""

from employee_tracker.infra.database import close_engine, open_engine, verify_connection
from employee_tracker.infra.queries import SqlTrackerRepository
from employee_tracker.infra.schema import create_schema, seed_sample_data

__all__: list[str] = [
    "SqlTrackerRepository",
    "close_engine",
    "create_schema",
    "open_engine",
    "seed_sample_data",
    "verify_connection",
]
