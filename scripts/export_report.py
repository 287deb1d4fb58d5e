"""Write an attendance report for the demo roster to disk.

Usage: python scripts/export_report.py FROM TO [FORMAT] [CLASS]
"""

from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from src.school_attendance.school_attendance.common.datetime_utils import today_local
from src.school_attendance.school_attendance.container import build_container
from src.school_attendance.school_attendance.database.bootstrap import seed_demo_data


def main(argv: list[str]) -> int:
    if len(argv) < 2:
        print(__doc__.strip().splitlines()[-1], file=sys.stderr)
        return 2

    date_from, date_to = argv[0], argv[1]
    export_format = argv[2] if len(argv) > 2 else "csv"
    class_name = argv[3] if len(argv) > 3 else None

    container = build_container()
    seed_demo_data(container.store, today=today_local())

    _, exported = container.report_service.generate(
        {
            "type": "custom",
            "dateRange": {"from": date_from, "to": date_to},
            "format": export_format,
            "className": class_name,
        }
    )

    out_dir = REPO_ROOT / "reports"
    out_dir.mkdir(parents=True, exist_ok=True)
    out_file = out_dir / exported.filename
    out_file.write_bytes(exported.content)

    print(f"OK: Report written -> {out_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
