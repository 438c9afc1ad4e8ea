"""
HTTP access to the dashcam.
"""
import logging
import time
from pathlib import Path
from typing import Optional, Tuple

import requests

from .. import config


class DeviceClient:
    """
    Thin wrapper around a requests.Session bound to one dashcam.

    Transport errors (requests.RequestException) are not caught here; the
    caller decides whether they are fatal.
    """

    def __init__(self, ip: str, session: Optional[requests.Session] = None):
        self.ip = ip
        self.base_url = f"http://{ip}"
        self.session = session or requests.Session()

    def url_for(self, path: str) -> str:
        if not path.startswith("/"):
            path = "/" + path
        return self.base_url + path

    def fetch_text(self, path: str, timeout: float) -> Tuple[int, str]:
        url = self.url_for(path)
        logging.debug(f"GET {url} (timeout={timeout}s)")
        resp = self.session.get(url, timeout=timeout)
        resp.encoding = "utf-8"
        return resp.status_code, resp.text

    def fetch_to_file(self, path: str, destination: Path, timeout: float) -> Tuple[int, int]:
        """
        Streams the response body into destination, chunk by chunk.
        Nothing is written unless the dashcam answers 200. The whole transfer
        is limited to timeout seconds, not just each socket read; running
        over raises requests.Timeout.

        Returns (status_code, bytes_written).
        """
        url = self.url_for(path)
        logging.debug(f"GET {url} -> {destination} (timeout={timeout}s)")

        deadline = time.monotonic() + timeout
        written = 0
        with self.session.get(url, timeout=timeout, stream=True) as resp:
            if resp.status_code != config.HTTP_OK:
                return resp.status_code, 0

            with open(destination, "wb") as f:
                for chunk in resp.iter_content(chunk_size=config.DOWNLOAD_CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)
                        written += len(chunk)
                    if time.monotonic() > deadline:
                        raise requests.Timeout(
                            f"Download of {path} from dashcam {self.ip} took longer than {timeout}s"
                        )

            return resp.status_code, written

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
