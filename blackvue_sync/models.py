from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import List, Optional


@dataclass(frozen=True)
class FileDescriptor:
    """
    Represents one video listed by the dashcam.
    """
    remote_path: str        # e.g. /Record/20180703_183000_NF.mp4
    file_name: str
    captured_at: datetime   # naive, device local time
    size_hint: str = ""     # passed through as-is, meaning unknown


@dataclass(frozen=True)
class TransferPlan:
    descriptor: FileDescriptor
    target_directory: Path
    final_path: Path
    staging_path: Path

    @property
    def subdirectory(self) -> str:
        return self.target_directory.name


class TransferStatus(StrEnum):
    DOWNLOADED = "downloaded"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass
class TransferResult:
    status: TransferStatus
    remote_path: str
    final_path: Optional[Path] = None
    bytes_written: int = 0
    error: str = ""


@dataclass
class RunOutcome:
    """Aggregated result of one sync run."""
    downloaded: int = 0
    skipped: int = 0
    failed: int = 0
    succeeded: bool = False
    results: List[TransferResult] = field(default_factory=list)

    def record(self, result: TransferResult) -> None:
        self.results.append(result)
        if result.status == TransferStatus.DOWNLOADED:
            self.downloaded += 1
        elif result.status == TransferStatus.SKIPPED:
            self.skipped += 1
        else:
            self.failed += 1

    @property
    def has_failures(self) -> bool:
        return self.failed > 0
