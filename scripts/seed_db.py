from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module

from library_attendance.container import build_container

DEMO_MEMBERS = [
    ("Ann Lee", "ann.lee@example.edu", "student"),
    ("Dr. Tomas Berg", "t.berg@example.edu", "faculty"),
    ("Mia Okafor", "mia.okafor@example.edu", "staff"),
    ("Guest Reader", "guest@example.com", "visitor"),
    ("Priya Raman", "priya@example.com", "premium"),
]


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(
        storage_config={
            "directory": settings.STORAGE_DIR,
            "strict": getattr(settings, "STRICT_STORAGE", False),
            "member_id_prefix": getattr(settings, "MEMBER_ID_PREFIX", "LIB"),
        }
    )

    existing = {m.email for m in container.member_service.list_members()}
    created = 0
    for name, email, membership_type in DEMO_MEMBERS:
        if email in existing:
            continue
        member = container.member_service.register(name=name, email=email, membership_type=membership_type)
        print(f"  {member.member_id}  {member.name} ({member.membership_type.value})")
        created += 1

    print(f"OK: Seeded {created} member(s) -> {settings.STORAGE_DIR}")


if __name__ == "__main__":
    main()
