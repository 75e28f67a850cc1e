"""Drive a crew verification through the service layer, without Flask.

Needs the demo data from scripts/seed_db.py.
"""

import importlib
import logging
from datetime import datetime

from config import get_settings_module

from src.crew_verification.crew_verification.container import build_container
from src.crew_verification.crew_verification.core.enums import TimeField
from src.crew_verification.crew_verification.verification.model import ShiftWindow
from src.crew_verification.crew_verification.verification.notifier import CollectingNotifier


def main():
    logging.basicConfig(level=logging.INFO)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG)
    service = container.crew_verification_service

    today = datetime.now().date()
    window = ShiftWindow(
        job_id="J-100",
        job_name="Warehouse refit",
        leader_id="u-lead",
        clock_in=datetime.combine(today, datetime.strptime("08:00", "%H:%M").time()),
        clock_out=datetime.combine(today, datetime.strptime("16:00", "%H:%M").time()),
    )
    roster = service.open(window)
    for member in roster:
        print(member.employee_name, member.source.value, member.edited_clock_in, member.edited_clock_out)

    service.toggle_confirmed("u-lead", "u-b")
    service.edit_time("u-lead", "u-a", TimeField.CLOCK_OUT, "16:30")

    notifier = CollectingNotifier()
    result = service.submit("u-lead", notifier=notifier)
    print(result.to_dict())
    print(notifier.messages)


if __name__ == "__main__":
    main()
