"""
Parsing of the dashcam video list (blackvue_vod.cgi).

The listing looks like:

    v:1.00
    n:/Record/20180703_183000_NF.mp4,s:1000000
    n:/Record/20180703_183000_NR.mp4,s:1000000
"""
import posixpath
from datetime import datetime
from typing import List, Tuple

from .. import config
from ..exceptions import ManifestParseError, ManifestVersionError
from ..models import FileDescriptor


def parse_manifest(raw_text: str) -> Tuple[str, List[FileDescriptor]]:
    """
    Splits the raw listing into its version tag and one FileDescriptor per
    record, in listing order.

    The version tag is checked before any record is looked at. Raises
    ManifestParseError on the first record that cannot be parsed, so a bad
    listing never yields a partial set of descriptors.
    """
    lines = raw_text.strip().splitlines()
    version_tag = lines[0].strip() if lines else ""
    check_version(version_tag)

    descriptors = []
    for line in lines[1:]:
        line = line.strip()
        if not line:
            continue
        descriptors.append(parse_record(line))

    return version_tag, descriptors


def check_version(version_tag: str) -> None:
    if version_tag.strip() != config.SUPPORTED_LIST_VERSION:
        raise ManifestVersionError(
            f"Invalid list version {version_tag!r}, expecting {config.SUPPORTED_LIST_VERSION}"
        )


def parse_record(line: str) -> FileDescriptor:
    parts = [p.strip() for p in line.split(",")]

    path_field = parts[0]
    if not path_field.startswith(config.PATH_MARKER):
        raise ManifestParseError(f"Could not find file path in list entry {line!r}")
    remote_path = _strip_marker(path_field, config.PATH_MARKER)
    if not remote_path:
        raise ManifestParseError(f"Empty file path in list entry {line!r}")

    size_hint = ""
    if len(parts) > 1:
        size_hint = _strip_marker(parts[1], config.SIZE_MARKER)

    file_name = posixpath.basename(remote_path)
    return FileDescriptor(
        remote_path=remote_path,
        file_name=file_name,
        captured_at=parse_capture_datetime(file_name),
        size_hint=size_hint,
    )


def parse_capture_datetime(file_name: str) -> datetime:
    """
    Extracts the recording time from names like 20180703_183000_NF.mp4.
    No timezone is attached; the dashcam records local time.
    """
    matches = config.FILENAME_DATETIME_RE.findall(file_name)
    if len(matches) != 1:
        raise ManifestParseError(f"Could not parse date from filename {file_name}")

    date_part, time_part = matches[0]
    try:
        return datetime.strptime(date_part + time_part, config.FILENAME_DATETIME_FORMAT)
    except ValueError:
        raise ManifestParseError(f"Could not parse date from filename {file_name}") from None


def _strip_marker(value: str, marker: str) -> str:
    if value.startswith(marker):
        return value[len(marker):]
    return value
