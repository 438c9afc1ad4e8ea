from pathlib import Path

from .. import config
from ..models import FileDescriptor, TransferPlan


def plan_transfer(descriptor: FileDescriptor, root: Path) -> TransferPlan:
    """
    Calculates where a video is stored locally: <root>/YYYY-MM-DD/<file name>.
    No filesystem access happens here.
    """
    dt = descriptor.captured_at
    folder = Path(root) / config.FOLDER_PATTERN.format(year=dt.year, month=dt.month, day=dt.day)
    final_path = folder / descriptor.file_name
    staging_path = folder / (descriptor.file_name + config.STAGING_SUFFIX)

    return TransferPlan(
        descriptor=descriptor,
        target_directory=folder,
        final_path=final_path,
        staging_path=staging_path,
    )


def should_transfer(plan: TransferPlan, ignore_existing: bool) -> bool:
    # A leftover .part file is not a finished download, only final_path counts
    if ignore_existing:
        return True
    return not plan.final_path.exists()
