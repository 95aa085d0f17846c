"""Tests for upload validation, saving and the end-to-end pipeline."""

import base64
import io

import pytest
from PIL import Image

from headshot_generation.credentials import StaticCredentialProvider
from headshot_generation.styles import HEADSHOT_PROMPTS
from headshot_studio import pipeline
from headshot_studio.pipeline import (
    UploadError,
    create_headshots,
    load_source_image,
    run_generation,
    save_headshots,
)

KEY = StaticCredentialProvider("test-key")


def _png_url(data: bytes) -> str:
    return "data:image/png;base64," + base64.b64encode(data).decode("ascii")


def _jpeg_url(data: bytes) -> str:
    return "data:image/jpeg;base64," + base64.b64encode(data).decode("ascii")


class TestLoadSourceImage:
    def test_png_becomes_data_url(self, red_png_file, red_png):
        assert load_source_image(red_png_file) == _png_url(red_png)

    def test_jpeg_mime_detected(self, tmp_path):
        path = tmp_path / "me.jpg"
        Image.new("RGB", (8, 8), (10, 20, 30)).save(path, format="JPEG")
        assert load_source_image(path).startswith("data:image/jpeg;base64,")

    def test_phone_multi_picture_jpeg_is_sent_as_jpeg(self, tmp_path):
        path = tmp_path / "phone.jpg"
        first = Image.new("RGB", (16, 16), (200, 10, 10))
        preview = Image.new("RGB", (8, 8), (10, 10, 200))
        first.save(path, format="MPO", save_all=True, append_images=[preview])
        with Image.open(path) as img:
            assert img.format == "MPO"

        assert load_source_image(path) == _jpeg_url(path.read_bytes())

    def test_unsupported_format_is_converted_to_png(self, tmp_path):
        path = tmp_path / "me.gif"
        Image.new("RGB", (8, 8), (0, 200, 0)).save(path, format="GIF")

        url = load_source_image(path)

        assert url.startswith("data:image/png;base64,")
        with Image.open(io.BytesIO(base64.b64decode(url.split(",", 1)[1]))) as img:
            assert img.format == "PNG"
            assert img.size == (8, 8)

    def test_rejects_non_image(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        with pytest.raises(UploadError, match="Please upload an image file"):
            load_source_image(path)

    def test_rejects_large_files(self, tmp_path, monkeypatch, red_png_file):
        monkeypatch.setattr(pipeline, "MAX_UPLOAD_BYTES", 10)
        with pytest.raises(UploadError, match="less than 5MB"):
            load_source_image(red_png_file)

    def test_rejects_missing_file(self, tmp_path):
        with pytest.raises(UploadError):
            load_source_image(tmp_path / "nope.png")


class TestSaveHeadshots:
    def test_batch_download_names(self, tmp_path, png_factory):
        images = [_png_url(png_factory((i * 60, 0, 0))) for i in range(3)]

        paths = save_headshots(images, "celebrity", tmp_path)

        assert [p.name for p in paths] == [
            "headshot-celebrity-1.png",
            "headshot-celebrity-2.png",
            "headshot-celebrity-3.png",
        ]
        with Image.open(paths[1]) as img:
            assert img.format == "PNG"
            assert img.getpixel((0, 0))[:3] == (60, 0, 0)

    def test_single_download(self, tmp_path, red_png):
        images = [_png_url(red_png)] * 2

        paths = save_headshots(images, "artistic", tmp_path, select=2)

        assert [p.name for p in paths] == ["headshot-artistic-2.png"]
        assert sorted(p.name for p in tmp_path.iterdir()) == ["headshot-artistic-2.png"]

    def test_select_out_of_range(self, tmp_path, red_png):
        with pytest.raises(IndexError):
            save_headshots([_png_url(red_png)], "artistic", tmp_path, select=3)

    def test_jpeg_payload_is_reencoded_as_png(self, tmp_path):
        jpg = tmp_path / "src.jpg"
        Image.new("RGB", (8, 8), (0, 0, 200)).save(jpg, format="JPEG")
        image = "data:image/png;base64," + base64.b64encode(jpg.read_bytes()).decode("ascii")

        (path,) = save_headshots([image], "editorial", tmp_path / "out")

        with Image.open(path) as img:
            assert img.format == "PNG"


def test_create_headshots_uses_style_prompt(red_png_file, red_png, fake_client, responses):
    client = fake_client(lambda i: responses.image(red_png))

    images = create_headshots(red_png_file, "techvisionary", credentials=KEY, client=client)

    assert len(images) == 3
    for call in client.calls:
        assert call["contents"][0].parts[1].text.startswith(HEADSHOT_PROMPTS["techvisionary"])


def test_run_generation_writes_outputs(tmp_path, red_png_file, fake_client, responses, png_factory):
    pngs = [png_factory((0, 0, i * 90), size=32) for i in range(3)]
    client = fake_client(lambda i: responses.image(pngs[i]) if i != 1 else responses.text())

    summary = run_generation(
        image_path=red_png_file,
        style="corporate",
        output_dir=tmp_path / "out",
        credentials=KEY,
        client=client,
    )

    assert summary["generated"] == 2
    assert summary["steps"] == ["generate", "save", "compare"]
    assert [p.rsplit("/", 1)[-1] for p in summary["headshots"]] == [
        "headshot-corporate-1.png",
        "headshot-corporate-2.png",
    ]
    with Image.open(summary["comparison"]) as sheet:
        # original plus two generated tiles
        assert sheet.size == (3 * 512 + 4 * 16, 512 + 2 * 16)
        assert sheet.getpixel((16 + 10, 16 + 10)) == (255, 0, 0)


def test_run_generation_without_compare(tmp_path, red_png_file, red_png, fake_client, responses):
    client = fake_client(lambda i: responses.image(red_png))

    summary = run_generation(
        image_path=red_png_file,
        style="creative",
        output_dir=tmp_path,
        credentials=KEY,
        client=client,
        compare=False,
        select=1,
    )

    assert "comparison" not in summary
    assert len(summary["headshots"]) == 1


def test_run_generation_keeps_results_when_selection_is_missing(
    tmp_path, red_png_file, red_png, fake_client, responses
):
    client = fake_client(lambda i: responses.image(red_png) if i < 2 else responses.text())

    summary = run_generation(
        image_path=red_png_file,
        style="corporate",
        output_dir=tmp_path,
        credentials=KEY,
        client=client,
        select=3,
    )

    assert summary["warning"] == "variation 3 missing"
    assert sorted(p.rsplit("/", 1)[-1] for p in summary["headshots"]) == [
        "headshot-corporate-1.png",
        "headshot-corporate-2.png",
    ]
    assert "comparison" in summary
