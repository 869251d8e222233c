import base64
from types import SimpleNamespace

import pytest

from gemini_examples.flows import FlowError
from gemini_examples.flows.base_flow import INTERNAL, INVALID_ARGUMENT
from gemini_examples.flows.video_flows import ImageToVideoFlow, TextToVideoFlow, _VideoFlow


def pending(name="operations/veo-1"):
    return SimpleNamespace(name=name, done=False, error=None, response=None)


def finished(video, name="operations/veo-1", error=None):
    response = SimpleNamespace(generated_videos=[SimpleNamespace(video=video)] if video else [])
    return SimpleNamespace(name=name, done=True, error=error, response=response)


def make_flow(cls, service, tmp_path):
    return cls(service=service, output_dir=tmp_path, poll_interval=0, poll_timeout=0)


def test_text_to_video_polls_and_saves_inline_video(fake_service, tmp_path):
    video = SimpleNamespace(video_bytes=b"mp4-bytes", uri=None, mime_type="video/mp4")
    fake_service.operations = [pending(), pending(), finished(video)]

    out = make_flow(TextToVideoFlow, fake_service, tmp_path).run(
        {"prompt": "a fox in snow", "aspect_ratio": "9:16", "negative_prompt": "text"}
    )

    assert out.operation_name == "operations/veo-1"
    assert open(out.file_path, "rb").read() == b"mp4-bytes"
    start = fake_service.calls[0]
    assert start[0] == "start_video"
    assert start[2] == {"prompt": "a fox in snow", "aspect_ratio": "9:16", "negative_prompt": "text"}
    assert [c[0] for c in fake_service.calls].count("refresh_operation") == 2


def test_video_falls_back_to_file_api(fake_service, tmp_path):
    video = SimpleNamespace(video_bytes=None, uri=None, mime_type=None)
    fake_service.operations = [finished(video)]

    out = make_flow(TextToVideoFlow, fake_service, tmp_path).run({"prompt": "waves"})

    assert open(out.file_path, "rb").read() == b"file-api-video"
    assert out.mime_type == "video/mp4"


def test_operation_error_is_internal(fake_service, tmp_path):
    fake_service.operations = [pending(), finished(None, error={"message": "safety filter"})]

    with pytest.raises(FlowError) as excinfo:
        make_flow(TextToVideoFlow, fake_service, tmp_path).run({"prompt": "something"})

    assert excinfo.value.status == INTERNAL
    assert "safety filter" in excinfo.value.message


def test_finished_without_video_is_internal(fake_service, tmp_path):
    fake_service.operations = [finished(None)]
    with pytest.raises(FlowError) as excinfo:
        make_flow(TextToVideoFlow, fake_service, tmp_path).run({"prompt": "something"})
    assert "without a generated video" in excinfo.value.message


def test_image_to_video_passes_image(fake_service, tmp_path):
    video = SimpleNamespace(video_bytes=b"v", uri=None, mime_type="video/mp4")
    fake_service.operations = [finished(video)]
    image = "data:image/png;base64," + base64.b64encode(b"png").decode()

    make_flow(ImageToVideoFlow, fake_service, tmp_path).run({"prompt": "animate it", "image": image})

    kwargs = fake_service.calls[0][2]
    assert kwargs["image"].data == b"png"
    assert kwargs["image"].mime_type == "image/png"


@pytest.mark.parametrize(
    "image",
    ["not-a-data-uri", "data:audio/wav;base64," + base64.b64encode(b"x").decode()],
)
def test_image_to_video_rejects_bad_image(fake_service, tmp_path, image):
    with pytest.raises(FlowError) as excinfo:
        make_flow(ImageToVideoFlow, fake_service, tmp_path).run({"prompt": "p", "image": image})
    assert excinfo.value.status == INVALID_ARGUMENT


def test_aspect_ratio_is_validated(fake_service, tmp_path):
    with pytest.raises(FlowError) as excinfo:
        make_flow(TextToVideoFlow, fake_service, tmp_path).run({"prompt": "p", "aspect_ratio": "4:3"})
    assert excinfo.value.status == INVALID_ARGUMENT


def test_video_flow_base_requires_start(fake_service, tmp_path):
    with pytest.raises(TypeError):
        make_flow(_VideoFlow, fake_service, tmp_path)

    class NoStart(_VideoFlow):
        name = "no_start"

    with pytest.raises(TypeError):
        make_flow(NoStart, fake_service, tmp_path)
