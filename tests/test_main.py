import csv
import functools
import logging
import pytest
import requests

from blackvue_sync import core, main
from blackvue_sync.models import RunOutcome, TransferResult, TransferStatus
from blackvue_sync.reporting import ReportGenerator

@pytest.fixture
def use_device(monkeypatch):
    def _use(device):
        monkeypatch.setattr(main, "run", functools.partial(core.run, client=device))
    return _use

@pytest.fixture(autouse=True)
def reset_logging():
    yield
    root_logger = logging.getLogger()
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

def test_parse_args_defaults():
    args = main.parse_args(["-i", "192.168.0.5", "-d", "/videos"])
    assert args.ip == "192.168.0.5"
    assert str(args.directory) == "/videos"
    assert args.ignore_existing is False
    assert args.connect_timeout == 5
    assert args.download_timeout == 300
    assert args.strict is False

def test_parse_args_requires_ip_and_directory():
    with pytest.raises(SystemExit):
        main.parse_args(["-d", "/videos"])
    with pytest.raises(SystemExit):
        main.parse_args(["--ip", "192.168.0.5"])

def test_main_success(device, root, use_device):
    use_device(device)
    assert main.main(["-i", "192.168.0.5", "-d", str(root)]) == 0
    assert (root / "2018-07-04" / "20180704_090500_EF.mp4").exists()

def test_main_missing_directory_exit_code(device, tmp_path, use_device):
    use_device(device)
    assert main.main(["-i", "192.168.0.5", "-d", str(tmp_path / "missing")]) == 1

def test_main_connection_error_exit_code(device, root, use_device):
    device.listing_error = requests.ConnectionError("refused")
    use_device(device)
    assert main.main(["-i", "192.168.0.5", "-d", str(root)]) == 2

def test_main_bad_version_exit_code(device, root, use_device):
    device.listing = "v:2.00\n"
    use_device(device)
    assert main.main(["-i", "192.168.0.5", "-d", str(root)]) == 3

def test_main_partition_error_exit_code(device, root, use_device):
    (root / "2018-07-03").write_text("in the way")
    use_device(device)
    assert main.main(["-i", "192.168.0.5", "-d", str(root)]) == 4

def test_per_file_failure_only_fails_when_strict(device, root, use_device):
    device.file_status["/Record/20180703_183000_NR.mp4"] = 404
    use_device(device)

    assert main.main(["-i", "192.168.0.5", "-d", str(root)]) == 0
    assert main.main(["-i", "192.168.0.5", "-d", str(root), "--strict"]) == 1

def test_main_writes_report_and_log_file(device, root, tmp_path, use_device):
    device.file_status["/Record/20180703_183000_NR.mp4"] = 404
    use_device(device)
    report = tmp_path / "report.csv"
    log_file = tmp_path / "sync.log"

    code = main.main([
        "-i", "192.168.0.5", "-d", str(root),
        "--report-csv", str(report), "--log-file", str(log_file),
    ])

    assert code == 0
    with open(report, newline="", encoding="utf-8") as f:
        rows = list(csv.reader(f))
    assert rows[0] == ReportGenerator.headers
    assert [r[1] for r in rows[1:]] == ["downloaded", "failed", "downloaded"]
    assert "404" in rows[2][4]

    for handler in logging.getLogger().handlers:
        handler.flush()
    log_text = log_file.read_text(encoding="utf-8")
    assert "Discovered 3 videos on device" in log_text
    assert "Done! downloaded=2 skipped=0 failed=1" in log_text

def test_summary_line():
    outcome = RunOutcome()
    outcome.record(TransferResult(TransferStatus.SKIPPED, "/Record/a.mp4"))
    outcome.record(TransferResult(TransferStatus.DOWNLOADED, "/Record/b.mp4"))
    assert ReportGenerator().summary(outcome) == "Done! downloaded=1 skipped=1 failed=0"

@pytest.mark.parametrize("option", ["--connect-timeout", "--download-timeout"])
@pytest.mark.parametrize("value", ["0", "-5"])
def test_non_positive_timeout_is_configuration_error(device, root, use_device, option, value):
    use_device(device)

    assert main.main(["-i", "192.168.0.5", "-d", str(root), option, value]) == 1
    assert device.listing_requests == 0
    assert device.requested == []
