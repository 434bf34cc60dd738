from __future__ import annotations

import argparse
import json
from pathlib import Path

from api.helpers.seizure_helpers import insert_reviewed_seizure
from ingestion.commit_batch import commit_records
from ingestion.ingest_text import parse_import_text


def import_file(path: Path, *, commit: bool = False) -> dict:
    batch = parse_import_text(path.read_text(encoding="utf-8"))
    summary = {
        "source_format": batch.source_format,
        "records_parsed": len(batch.records),
        "failures": [failure.to_dict() for failure in batch.failures],
    }
    if not batch.records:
        summary["status"] = "nothing could be parsed"
        return summary
    if not commit:
        summary["status"] = "parsed"
        summary["records"] = [record.to_dict() for record in batch.records]
        return summary

    summary["status"] = "committed"
    summary["commit"] = commit_records(batch.records, insert_reviewed_seizure).to_dict()
    return summary


def main() -> None:
    parser = argparse.ArgumentParser(description="Parse seizure notes or an exported CSV and optionally import them.")
    parser.add_argument("path", type=str, help="Path to a text or CSV/TSV file")
    parser.add_argument("--commit", action="store_true", help="Write parsed records to the database")
    args = parser.parse_args()
    print(json.dumps(import_file(Path(args.path), commit=args.commit), indent=2))


if __name__ == "__main__":
    main()
