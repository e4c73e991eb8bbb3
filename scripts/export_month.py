from __future__ import annotations

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
for p in (REPO_ROOT, REPO_ROOT / "src" / "genba_attendance"):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from config import get_settings_module, load_settings

from genba_attendance.container import build_container
from genba_attendance.reports.csv_export import build_csv_rows, export_filename, render_csv


def main(argv: list[str]) -> None:
    """Generate a demo month and write its CSV export. Usage: export_month.py YYYY-MM-DD [out_dir]"""
    if not argv:
        print(main.__doc__)
        raise SystemExit(2)

    target_date = argv[0]
    out_dir = Path(argv[1]) if len(argv) > 1 else Path.cwd()

    container = build_container(settings=load_settings())
    store = container.store
    store.set_selected_date(target_date)
    added = store.load_monthly_data(target_date)

    rows = build_csv_rows(
        records=store.records,
        workers=store.workers,
        sites=store.sites,
        selected_date=target_date,
        tz=store.tz,
    )
    out_path = out_dir / export_filename(target_date)
    out_path.write_bytes(render_csv(rows).encode("utf-8"))

    print(f"OK: {get_settings_module()} -> {added} records generated, {len(rows)} rows written to {out_path}")


if __name__ == "__main__":
    main(sys.argv[1:])
