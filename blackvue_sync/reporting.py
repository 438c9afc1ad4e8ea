import csv
import logging
from pathlib import Path

from .models import RunOutcome

class ReportGenerator:
    headers = [
        "Remote Path",
        "Status",
        "Local Path",
        "Bytes",
        "Error",
    ]

    def summary(self, outcome: RunOutcome) -> str:
        return (f"Done! downloaded={outcome.downloaded} "
                f"skipped={outcome.skipped} failed={outcome.failed}")

    def write_csv(self, outcome: RunOutcome, output_csv: Path):
        """Writes one row per video handled in the run, in list order."""
        logging.info(f"Writing run report -> {output_csv}")

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.headers)

            for result in outcome.results:
                writer.writerow([
                    result.remote_path,
                    str(result.status),
                    str(result.final_path) if result.final_path else "",
                    result.bytes_written,
                    result.error,
                ])

        logging.info(f"Report complete. {len(outcome.results)} rows written.")
