import logging
import os
from pathlib import Path
from typing import Set

import requests

from .. import config
from ..exceptions import PartitionError, TransferError
from ..models import TransferPlan, TransferResult, TransferStatus


class TransferExecutor:
    def __init__(self, client, download_timeout: float = config.DEFAULT_DOWNLOAD_TIMEOUT):
        """
        Args:
            client: anything with fetch_to_file(path, destination, timeout),
                    normally a DeviceClient.
        """
        self.client = client
        self.download_timeout = download_timeout
        # Date folders already created or confirmed during this run
        self._ready_dirs: Set[Path] = set()

    def prepare_directory(self, plan: TransferPlan) -> None:
        """
        Creates the date folder for a plan (non-recursive, the root must exist).
        Any failure aborts the run: every other file of that day would fail too.
        """
        folder = plan.target_directory
        if folder in self._ready_dirs:
            return

        if not folder.is_dir():
            try:
                folder.mkdir()
            except FileExistsError:
                if not folder.is_dir():
                    raise PartitionError(f"Could not create subdirectory {plan.subdirectory}: path exists and is not a directory")
            except OSError as e:
                raise PartitionError(f"Could not create subdirectory {plan.subdirectory}: {e}") from e
            else:
                logging.info(f"Created subdirectory {plan.subdirectory}")

        self._ready_dirs.add(folder)

    def execute(self, plan: TransferPlan) -> TransferResult:
        """
        Downloads into the .part file, then renames it over the final name.
        A failed download never leaves anything under the final name.
        """
        self.prepare_directory(plan)

        remote_path = plan.descriptor.remote_path
        logging.info(f"Downloading {remote_path} ...")

        try:
            written = self._download(plan)
            os.replace(plan.staging_path, plan.final_path)
        except (TransferError, requests.RequestException, OSError) as e:
            self._discard(plan.staging_path)
            logging.error(f"Failed to download {remote_path}: {e}")
            return TransferResult(
                status=TransferStatus.FAILED,
                remote_path=remote_path,
                final_path=plan.final_path,
                error=str(e),
            )

        logging.info(f"Successfully downloaded {remote_path} ({written} bytes)")
        return TransferResult(
            status=TransferStatus.DOWNLOADED,
            remote_path=remote_path,
            final_path=plan.final_path,
            bytes_written=written,
        )

    def _download(self, plan: TransferPlan) -> int:
        status, written = self.client.fetch_to_file(
            plan.descriptor.remote_path,
            plan.staging_path,
            self.download_timeout,
        )
        if status != config.HTTP_OK:
            raise TransferError(f"dashcam answered HTTP {status}")
        if not plan.staging_path.exists():
            raise TransferError(f"no data written to {plan.staging_path.name}")
        return written

    def _discard(self, staging_path: Path) -> None:
        try:
            staging_path.unlink(missing_ok=True)
        except OSError as e:
            logging.warning(f"Could not remove partial file {staging_path}: {e}")
