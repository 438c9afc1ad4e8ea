import logging
import os
from pathlib import Path
from typing import List, Optional

import requests
from tqdm import tqdm

from . import config
from .exceptions import ConfigurationError, DeviceConnectionError
from .manifest.parser import parse_manifest
from .models import FileDescriptor, RunOutcome, TransferResult, TransferStatus
from .organization.rules import plan_transfer, should_transfer
from .transfer.client import DeviceClient
from .transfer.executor import TransferExecutor


def validate_root(root: Path) -> Path:
    if not root.exists() or not root.is_dir():
        raise ConfigurationError(f"--directory (-d) must be an existing directory: {root}")
    if not os.access(root, os.W_OK):
        raise ConfigurationError(f"--directory (-d) is not writeable: {root}")
    return root


def validate_timeouts(connect_timeout: float, download_timeout: float) -> None:
    # requests/urllib3 reject 0; there is no "no timeout" setting here
    if connect_timeout <= 0:
        raise ConfigurationError(f"--connect-timeout must be a positive number of seconds, got {connect_timeout}")
    if download_timeout <= 0:
        raise ConfigurationError(f"--download-timeout must be a positive number of seconds, got {download_timeout}")


class SyncOrchestrator:
    def __init__(self, client):
        """
        Args:
            client: object offering fetch_text() and fetch_to_file(),
                    normally a DeviceClient bound to the dashcam.
        """
        self.client = client

    def run(self,
            root: Path,
            ignore_existing: bool = False,
            connect_timeout: float = config.DEFAULT_CONNECT_TIMEOUT,
            download_timeout: float = config.DEFAULT_DOWNLOAD_TIMEOUT) -> RunOutcome:
        """
        Executes one sync pass.
        1. Validate the target directory
        2. Fetch & Parse the video list (all-or-nothing)
        3. Plan, Filter & Download each video in list order

        Fatal problems raise a BlackVueSyncError subclass before any further
        files are touched; individual download failures are only counted.
        """
        root = validate_root(Path(root))
        validate_timeouts(connect_timeout, download_timeout)

        # --- Step 1: Video List ---
        descriptors = self.fetch_manifest(connect_timeout)

        # --- Step 2: Transfers ---
        executor = TransferExecutor(self.client, download_timeout)
        outcome = RunOutcome()

        for descriptor in tqdm(descriptors, desc="Syncing", unit="file"):
            outcome.record(self._sync_one(descriptor, root, executor, ignore_existing))

        outcome.succeeded = True
        return outcome

    def fetch_manifest(self, connect_timeout: float) -> List[FileDescriptor]:
        try:
            status, body = self.client.fetch_text(config.LISTING_PATH, connect_timeout)
        except (requests.ConnectionError, requests.Timeout) as e:
            raise DeviceConnectionError(
                "Could not connect to dashcam, is it powered on and connected?"
            ) from e
        except requests.RequestException as e:
            raise DeviceConnectionError(f"Could not get video list from dashcam: {e}") from e

        if status != config.HTTP_OK:
            raise DeviceConnectionError(f"Could not get video list from dashcam (HTTP {status})")

        version_tag, descriptors = parse_manifest(body)

        logging.info(f"List version is {version_tag}")
        logging.info(f"Discovered {len(descriptors)} videos on device")
        return descriptors

    def _sync_one(self,
                  descriptor: FileDescriptor,
                  root: Path,
                  executor: TransferExecutor,
                  ignore_existing: bool) -> TransferResult:
        plan = plan_transfer(descriptor, root)

        if not should_transfer(plan, ignore_existing):
            logging.info(f"Skipping existing {descriptor.remote_path} ({plan.subdirectory}/{descriptor.file_name})")
            return TransferResult(
                status=TransferStatus.SKIPPED,
                remote_path=descriptor.remote_path,
                final_path=plan.final_path,
            )

        return executor.execute(plan)


def run(ip: str,
        root: Path,
        ignore_existing: bool = False,
        connect_timeout: float = config.DEFAULT_CONNECT_TIMEOUT,
        download_timeout: float = config.DEFAULT_DOWNLOAD_TIMEOUT,
        client: Optional[DeviceClient] = None) -> RunOutcome:
    """Validates the settings, then syncs the dashcam at ip into root."""
    if not ip or not ip.strip():
        raise ConfigurationError("--ip (-i) is a required parameter")
    # Directory problems must surface before any network activity
    root = validate_root(Path(root))
    validate_timeouts(connect_timeout, download_timeout)

    if client is not None:
        return SyncOrchestrator(client).run(root, ignore_existing, connect_timeout, download_timeout)

    with DeviceClient(ip.strip()) as device:
        return SyncOrchestrator(device).run(root, ignore_existing, connect_timeout, download_timeout)
