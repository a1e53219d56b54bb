"""
Persistent employee roster.
"""

import logging
import time
from typing import Callable, List

from pydantic import ValidationError

from timesheet_extractor.models.employee import Employee
from timesheet_extractor.services.key_value_store import JsonKeyValueStore

logger = logging.getLogger(__name__)

EMPLOYEES_STORAGE_KEY = "employees-list"


def _millisecond_clock() -> int:
    return int(time.time() * 1000)


class RosterStore:
    """
    Stores the list of known employees.

    Ids are millisecond timestamps. When two employees are added within the
    same millisecond the id is bumped until it is unique.
    """

    def __init__(
        self,
        kv: JsonKeyValueStore,
        clock: Callable[[], int] = _millisecond_clock,
    ):
        self.kv = kv
        self._clock = clock

    def list(self) -> List[Employee]:
        """Return all employees in insertion order."""
        employees = []
        for raw in self.kv.get(EMPLOYEES_STORAGE_KEY, []):
            try:
                employees.append(Employee.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Ignoring invalid roster entry {raw!r}: {e}")
        return employees

    def add(self, name: str) -> Employee:
        """
        Add an employee.

        Raises:
            ValidationError: If the name is blank
        """
        employees = self.list()
        used_ids = {employee.id for employee in employees}

        token = self._clock()
        while str(token) in used_ids:
            token += 1

        employee = Employee(id=str(token), name=name)
        employees.append(employee)
        self._save(employees)

        logger.info(f"Added employee {employee.name} (id={employee.id})")
        return employee

    def update(self, employee_id: str, name: str) -> None:
        """Rename an employee. Unknown ids are ignored."""
        employees = self.list()
        for index, employee in enumerate(employees):
            if employee.id == employee_id:
                employees[index] = Employee(id=employee.id, name=name)
                self._save(employees)
                logger.info(f"Renamed employee {employee_id} to {name.strip()}")
                return

        logger.debug(f"Update ignored, unknown employee id {employee_id}")

    def remove(self, employee_id: str) -> None:
        """Remove an employee. Unknown ids are ignored."""
        employees = self.list()
        remaining = [e for e in employees if e.id != employee_id]
        if len(remaining) == len(employees):
            logger.debug(f"Remove ignored, unknown employee id {employee_id}")
            return

        self._save(remaining)
        logger.info(f"Removed employee {employee_id}")

    def _save(self, employees: List[Employee]) -> None:
        self.kv.set(
            EMPLOYEES_STORAGE_KEY, [employee.model_dump() for employee in employees]
        )
