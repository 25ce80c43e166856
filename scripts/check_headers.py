# scripts/check_headers.py
# Print the header row of the dashboard sheet with column letters and the
# keys /api/data will emit for them.
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from shared.ggSheet import build_sheets_service, column_letter
from shared.utils import load_env
from apps.timeline.api.helpers.config import load_settings, require_credentials, resolve_sheet_id
from apps.timeline.api.helpers.dataTransform import normalize_header_key
from apps.timeline.api.helpers.ggSheet import read_header_row


def main():
    load_env()
    settings = load_settings()
    service = build_sheets_service(require_credentials(settings))
    sheet_id = resolve_sheet_id(settings)

    sheet_name, headers = read_header_row(service, sheet_id, settings.target_sheet)
    print(f"Checking Sheet: {sheet_name} ({sheet_id})")

    for i, header in enumerate(headers):
        key = normalize_header_key(header) or "(skipped)"
        print(f"{column_letter(i)} ({i}): {header} -> {key}")


if __name__ == "__main__":
    main()
