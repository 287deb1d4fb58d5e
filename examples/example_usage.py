"""Example: drive the service layer directly, without Flask.

Controllers are thin; every rule lives in the services wired by the container.
"""

import json
from datetime import date

from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.core.enums import MarkingMethod
from src.school_attendance.school_attendance.database.bootstrap import seed_demo_data


def main():
    container = build_container()
    seed_demo_data(container.store, today=date.today())

    rahul = container.student_service.get_by_admission_no("APS003")
    result = container.attendance_service.mark(
        MarkingMethod.QR,
        {"qrData": container.student_service.qr_payload(rahul)},
    )
    print(json.dumps(result.to_dict(), indent=2))
    print(json.dumps(container.stats_service.dashboard(date.today()), indent=2))


if __name__ == "__main__":
    main()
