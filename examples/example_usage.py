"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the business rules live in the services.
"""

from library_attendance.container import build_container
from library_attendance.storage.memory_store import MemoryBlobStore


def main():
    container = build_container(storage_config={}, store=MemoryBlobStore())

    ann = container.member_service.register(name="Ann", email="a@x.com", membership_type="student")
    for _ in range(3):
        result = container.attendance_service.scan(ann.member_id)
        print(result.event.kind.value, result.event.timestamp.strftime("%H:%M:%S"))

    print(container.attendance_service.today().stats)


if __name__ == "__main__":
    main()
