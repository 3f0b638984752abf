"""Example: use the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from datetime import date

from src.workforce_records.workforce_records.container import build_container
from src.workforce_records.workforce_records.core.enums import Role, TimeOffStatus, TimeOffType
from src.workforce_records.workforce_records.storage.memory_store import MemoryStore
from src.workforce_records.workforce_records.timeoff.model import NewTimeOffRequest


def main():
    container = build_container(store=MemoryStore())

    john = container.auth_service.login("OIJODO20240002", "TempPass123!")
    container.attendance_service.check_in(john.id)

    request = container.time_off_service.submit_request(
        owner=john,
        new_request=NewTimeOffRequest(
            type=TimeOffType.PAID,
            start_date=date(2024, 7, 1),
            end_date=date(2024, 7, 2),
            reason="Conference",
        ),
    )
    container.time_off_service.decide(request.id, TimeOffStatus.APPROVED, current_role=Role.ADMIN)

    for balance in container.time_off_service.balances(john):
        print(balance.to_dict())
    print(container.payroll_service.preview(50000).to_dict())


if __name__ == "__main__":
    main()
