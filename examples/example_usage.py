"""Example: call the service layer directly (no Flask).

Prints the monthly summary for one employee as the API would return it.
"""

import importlib
import json
import sys

from dotenv import load_dotenv

from config import get_settings_module

from src.time_tracker.time_tracker.container import build_container


def main(employee_id: str = "EMP001"):
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=settings.DB_CONFIG, mail_config=settings.MAIL_CONFIG)
    summary = container.report_service.monthly_summary(employee_id=employee_id)
    print(json.dumps(summary.as_dict(), indent=2))


if __name__ == "__main__":
    main(*sys.argv[1:2])
