"""Ví dụ: dùng store + report service trực tiếp (không qua Flask).

Scan a site, check in/out, then print the monthly company summary.
"""

from datetime import datetime, timezone

from config import load_settings

from genba_attendance.container import build_container


def main():
    container = build_container(settings=load_settings("testing"))
    store = container.store
    reports = container.report_service

    store.set_selected_date("2024-05-01")
    store.set_scanned_site(container.site_resolver.resolve("site-shibuya-a", store.sites))
    print(store.check_in(now=datetime(2024, 5, 1, 8, 0, tzinfo=timezone.utc)).message)
    print(store.check_out(now=datetime(2024, 5, 1, 17, 0, tzinfo=timezone.utc)).message)

    for row in reports.company_summary(records=store.records, workers=store.workers, selected_date="2024-05-01"):
        print(f"{row.company}: {row.total_man_days} 人日 / {row.total_hours:.1f}h")


if __name__ == "__main__":
    main()
