import pytest

from blackvue_sync import config


class FakeDevice:
    """
    In-memory dashcam offering the same fetch_text/fetch_to_file calls as
    DeviceClient.
    """

    def __init__(self, listing="v:1.00\n", files=None):
        self.listing = listing
        self.listing_status = 200
        self.listing_error = None
        self.files = dict(files or {})
        self.file_status = {}
        # remote path -> exception raised after writing half the body
        self.broken = {}
        self.requested = []
        self.listing_requests = 0

    def fetch_text(self, path, timeout):
        assert path == config.LISTING_PATH
        self.listing_requests += 1
        if self.listing_error:
            raise self.listing_error
        return self.listing_status, self.listing

    def fetch_to_file(self, path, destination, timeout):
        self.requested.append(path)
        status = self.file_status.get(path, 200 if path in self.files else 404)
        if status != 200:
            return status, 0

        data = self.files[path]
        with open(destination, "wb") as f:
            if path in self.broken:
                f.write(data[: len(data) // 2])
                raise self.broken[path]
            f.write(data)
        return status, len(data)


def make_listing(*paths, version="v:1.00"):
    lines = [version] + [f"n:{p},s:1000000" for p in paths]
    return "\n".join(lines) + "\n"


@pytest.fixture
def device():
    paths = [
        "/Record/20180703_183000_NF.mp4",
        "/Record/20180703_183000_NR.mp4",
        "/Record/20180704_090500_EF.mp4",
    ]
    return FakeDevice(
        listing=make_listing(*paths),
        files={p: f"video {p}".encode() * 100 for p in paths},
    )


@pytest.fixture
def root(tmp_path):
    r = tmp_path / "videos"
    r.mkdir()
    return r


@pytest.fixture(name="make_listing")
def make_listing_fixture():
    return make_listing


@pytest.fixture
def device_factory():
    return FakeDevice
