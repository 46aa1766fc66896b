"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the weekly bookkeeping lives in the services.
"""

from datetime import datetime

from src.checkin_tracker.checkin_tracker.container import build_container


def main():
    container = build_container(backend="memory")
    svc = container.checkin_service

    for note in ("math review", "", "reading log"):
        svc.add_check_in("Ms.Rivera", "Sam", note)

    closed = svc.end_week("ms.rivera", "Sam", now=datetime(2024, 3, 14, 15, 0))
    print("closed:", closed)
    print("students:", list(svc.list_subjects("ms.rivera")))
    print("history:", [t.to_dict() for t in svc.weekly_history("ms.rivera", "sam")])


if __name__ == "__main__":
    main()
