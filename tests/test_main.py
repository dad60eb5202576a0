import json

import pytest

from video_processor import main
from video_processor.response_models import JobResponse

JOB_VARS = (
    "K8S_JOB_ENV_VIDEO_KEY",
    "K8S_JOB_ENV_VIDEO_ID",
    "K8S_JOB_ENV_USER_ID",
    "K8S_JOB_ENV_VIDEO_EXPORT_FPS",
    "K8S_JOB_ENV_VIDEO_EXPORT_FORMAT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in JOB_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    "raw, expected",
    [(None, 1.0), ("", 1.0), ("2.5", 2.5), ("abc", 1.0), ("-1", -1.0)],
)
def test_parse_frame_rate(raw, expected):
    assert main.parse_frame_rate(raw) == expected


def test_request_from_env_without_key():
    assert main.request_from_env() is None


def test_request_from_env_defaults(monkeypatch):
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_KEY", "videos/a.mp4")

    request = main.request_from_env()

    assert request.video_key == "videos/a.mp4"
    assert request.video_id is None
    assert request.user_id is None
    assert request.configuration.frame_rate == 1.0
    assert request.configuration.output_format == "jpg"


def test_request_from_env_empty_format_uses_default(monkeypatch):
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_KEY", "videos/a.mp4")
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_EXPORT_FORMAT", "")

    request = main.request_from_env()

    assert request.configuration.output_format == "jpg"


def test_request_from_env_full(monkeypatch):
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_KEY", "videos/a.mp4")
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_ID", "12")
    monkeypatch.setenv("K8S_JOB_ENV_USER_ID", "34")
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_EXPORT_FPS", "0.5")
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_EXPORT_FORMAT", "PNG")

    request = main.request_from_env()

    assert (request.video_id, request.user_id) == ("12", "34")
    assert request.configuration.frame_rate == 0.5
    assert request.configuration.output_format == "PNG"


class FakeController:
    def __init__(self, response):
        self.response = response
        self.requests = []

    def process_video(self, request):
        self.requests.append(request)
        return self.response


@pytest.fixture
def job(monkeypatch):
    """Runs run_job with tracing, logging and the real dependencies stubbed out."""
    monkeypatch.setattr(main, "patch_all", lambda: None)
    monkeypatch.setattr(main, "setup_logging", lambda: None)

    def run(response):
        controller = FakeController(response)
        monkeypatch.setattr(main, "get_controller", lambda config: controller)
        return main.run_job(), controller

    return run


def test_run_job_without_key_prints_usage(job, capsys):
    exit_code, controller = job(JobResponse(status_code=200, body="{}"))

    assert exit_code == 1
    assert controller.requests == []
    assert "K8S_JOB_ENV_VIDEO_KEY" in capsys.readouterr().err


def test_run_job_success(job, monkeypatch, capsys):
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_KEY", "videos/a.mp4")
    body = json.dumps({"success": True, "message": "ok"})

    exit_code, controller = job(JobResponse(status_code=200, body=body))

    assert exit_code == 0
    assert controller.requests[0].video_key == "videos/a.mp4"
    assert json.loads(capsys.readouterr().out) == {"success": True, "message": "ok"}


def test_run_job_failure_exit_code(job, monkeypatch):
    monkeypatch.setenv("K8S_JOB_ENV_VIDEO_KEY", "videos/a.mp4")

    exit_code, _ = job(JobResponse(status_code=404, body="{}"))

    assert exit_code == 1
