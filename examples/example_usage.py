"""Example: use the service layer directly (no Flask).

Controllers stay thin; the scan pipeline and report logic live in services.
"""

from classroom_attendance.auth.model import CurrentUser
from classroom_attendance.container import build_container
from classroom_attendance.main import load_settings
from classroom_attendance.payload.codec import build_payload


def main():
    container = build_container(settings=load_settings())

    text = build_payload(class_id="665f1c2ab7", subject_code="IT101", year_section="BSIT 2A")
    print(container.validator.validate(text))

    user = CurrentUser(user_id="2021-00123", first_name="Ana", last_name="Reyes")
    result = container.scan_service.record_scan(text, user)
    print(result.outcome.value, [e.to_dict() for e in container.outbox.entries()][:1])

    print(container.report_reader.overview().to_dict())


if __name__ == "__main__":
    main()
