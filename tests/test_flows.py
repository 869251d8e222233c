import pytest

from gemini_examples.flows import FlowError, get_flow, list_flows
from gemini_examples.flows.base_flow import INTERNAL, INVALID_ARGUMENT
from gemini_examples.flows.speech_flows import parse_dialogue, speakers_in_order
from gemini_examples.services.media import DataUri


def test_registry_has_every_example_flow():
    names = [f.name for f in list_flows()]
    assert names == sorted(
        [
            "flash_image_generator",
            "image_to_video",
            "imagen_generator",
            "podcast_dialogue",
            "story_generator",
            "text_to_video",
            "translate_to_spanish_speech",
        ]
    )


def test_unknown_flow():
    with pytest.raises(KeyError, match="Valid flows"):
        get_flow("does_not_exist")


# ---------------------------------------------------------------------------
# Story
# ---------------------------------------------------------------------------


def test_story_flow(fake_service):
    out = get_flow("story_generator", service=fake_service).run({"topic": "dragons", "length": "short"})

    assert out.title == "The Dragon"
    assert out.word_count == 8
    name, args, kwargs = fake_service.calls[0]
    assert name == "generate_json"
    assert "short story about: dragons" in args[0]
    assert "150 words" in args[0]


def test_story_flow_defaults_title_to_topic(fake_service):
    fake_service.json = {"story": "Some words here."}
    out = get_flow("story_generator", service=fake_service).run({"topic": "space cats"})
    assert out.title == "Space Cats"


@pytest.mark.parametrize(
    "payload",
    [{}, {"topic": ""}, {"topic": "x", "length": "epic"}],
)
def test_story_flow_invalid_input(fake_service, payload):
    with pytest.raises(FlowError) as excinfo:
        get_flow("story_generator", service=fake_service).run(payload)
    assert excinfo.value.status == INVALID_ARGUMENT
    assert fake_service.calls == []


def test_blank_topic_is_rejected(fake_service):
    with pytest.raises(FlowError) as excinfo:
        get_flow("story_generator", service=fake_service).run({"topic": "   "})
    assert excinfo.value.status == INVALID_ARGUMENT


def test_service_failure_becomes_internal_error(fake_service):
    fake_service.error = RuntimeError("quota exceeded")

    with pytest.raises(FlowError) as excinfo:
        get_flow("story_generator", service=fake_service).run({"topic": "dragons"})

    err = excinfo.value
    assert err.status == INTERNAL
    assert "quota exceeded" in err.message
    assert err.to_dict() == {"status": INTERNAL, "message": err.message, "flow": "story_generator"}
    assert isinstance(err.__cause__, RuntimeError)


# ---------------------------------------------------------------------------
# Speech
# ---------------------------------------------------------------------------


def _wav_from(media):
    uri = DataUri.parse(media)
    assert uri.mime_type == "audio/wav"
    assert uri.data.startswith(b"RIFF")
    return uri


def test_translate_speech_flow(fake_service):
    out = get_flow("translate_to_spanish_speech", service=fake_service).run({"text": "Hello, world"})

    assert out.english == "Hello, world"
    assert out.spanish == "Hola, mundo"
    _wav_from(out.media)
    speech_call = fake_service.calls[1]
    assert speech_call[0] == "generate_speech"
    assert speech_call[1][0].endswith("Hola, mundo")


def test_translate_speech_passes_voice(fake_service):
    get_flow("translate_to_spanish_speech", service=fake_service).run({"text": "Hi", "voice": "Kore"})
    assert fake_service.calls[1][2] == {"voice": "Kore"}


def test_parse_dialogue_continuations_and_blank_lines():
    turns = parse_dialogue("Host: Welcome!\n\nGuest: Thanks\nfor having me.\nHost: Great.")
    assert [(t.speaker, t.line) for t in turns] == [
        ("Host", "Welcome!"),
        ("Guest", "Thanks for having me."),
        ("Host", "Great."),
    ]
    assert speakers_in_order(turns) == ["Host", "Guest"]


def test_parse_dialogue_colon_in_prose_continues_turn():
    turns = parse_dialogue("Host: Hi\nGuest: Hey\nhere's the thing: it works")
    assert [(t.speaker, t.line) for t in turns] == [
        ("Host", "Hi"),
        ("Guest", "Hey here's the thing: it works"),
    ]


def test_parse_dialogue_third_speaker_is_still_a_speaker():
    turns = parse_dialogue("Host: Hi\nGuest: Hey\nProducer: Cut!")
    assert speakers_in_order(turns) == ["Host", "Guest", "Producer"]


def test_parse_dialogue_requires_leading_speaker():
    with pytest.raises(ValueError):
        parse_dialogue("just narration\nHost: hi")


def test_podcast_flow_two_speakers_default_voices(fake_service):
    out = get_flow("podcast_dialogue", service=fake_service).run(
        {"script": "Host: Welcome!\nGuest: Thanks!"}
    )

    assert out.speakers == ["Host", "Guest"]
    _wav_from(out.media)
    name, args, kwargs = fake_service.calls[0]
    assert name == "generate_multi_speaker_speech"
    assert kwargs["voices"] == {"Host": "Algenib", "Guest": "Achernar"}
    assert "Host: Welcome!\nGuest: Thanks!" in args[0]


def test_podcast_flow_voice_override(fake_service):
    get_flow("podcast_dialogue", service=fake_service).run(
        {"script": "Host: Hi\nGuest: Hey", "voices": {"Guest": "Puck"}}
    )
    assert fake_service.calls[0][2]["voices"] == {"Host": "Algenib", "Guest": "Puck"}


def test_podcast_flow_single_speaker_uses_single_voice(fake_service):
    get_flow("podcast_dialogue", service=fake_service).run({"script": "Host: Just me today."})
    assert fake_service.calls[0][0] == "generate_speech"


@pytest.mark.parametrize(
    "payload",
    [
        {"script": "A: one\nB: two\nC: three"},
        {"script": "Host: hi", "voices": {"Guest": "Puck"}},
        {"script": "no speaker here"},
    ],
)
def test_podcast_flow_rejections(fake_service, payload):
    with pytest.raises(FlowError) as excinfo:
        get_flow("podcast_dialogue", service=fake_service).run(payload)
    assert excinfo.value.status == INVALID_ARGUMENT
    assert fake_service.calls == []


# ---------------------------------------------------------------------------
# Images
# ---------------------------------------------------------------------------


def test_flash_image_flow(fake_service):
    out = get_flow("flash_image_generator", service=fake_service).run({"prompt": "a cat wearing a cape"})
    assert len(out.images) == 1
    assert out.images[0].startswith("data:image/png;base64,")
    assert out.caption == "Here is your image"


def test_flash_image_flow_without_images_is_internal_error(fake_service):
    fake_service.images = []
    with pytest.raises(FlowError) as excinfo:
        get_flow("flash_image_generator", service=fake_service).run({"prompt": "anything"})
    assert excinfo.value.status == INTERNAL


def test_imagen_flow_style_and_count(fake_service):
    out = get_flow("imagen_generator", service=fake_service).run(
        {"prompt": "a lighthouse", "style": "watercolor", "count": 3, "aspect_ratio": "16:9"}
    )

    assert len(out.images) == 3
    _, args, kwargs = fake_service.calls[0]
    assert args[0] == "a lighthouse, in watercolor style"
    assert kwargs == {"count": 3, "aspect_ratio": "16:9"}


@pytest.mark.parametrize("count", [0, 5])
def test_imagen_flow_count_bounds(fake_service, count):
    with pytest.raises(FlowError) as excinfo:
        get_flow("imagen_generator", service=fake_service).run({"prompt": "x", "count": count})
    assert excinfo.value.status == INVALID_ARGUMENT
