import json

from PIL import Image

from showroom.previews import attach_previews, attach_previews_file, generate_preview


def _image(path, size=(200, 100)):
    Image.new("RGB", size, (10, 120, 200)).save(path)
    return path


def test_generate_preview_is_square_jpeg(tmp_path):
    src = _image(tmp_path / "wide.png")
    dst = tmp_path / "out" / "nested" / "p.jpg"
    assert generate_preview(str(src), str(dst), size=60)
    with Image.open(dst) as img:
        assert img.size == (60, 60)
        assert img.format == "JPEG"


def test_generate_preview_reports_failure(tmp_path):
    (tmp_path / "bad.png").write_bytes(b"garbage")
    assert not generate_preview(str(tmp_path / "bad.png"), str(tmp_path / "p.jpg"))
    assert not (tmp_path / "p.jpg").exists()


def test_attach_previews_keeps_alignment(tmp_path):
    _image(tmp_path / "cover.png")
    _image(tmp_path / "a.png")
    rows = [{
        "id": 4,
        "cover_image": "cover.png",
        "gallery_images": ["a.png", "https://cdn.example/b.jpg", "missing.png", "a.png"],
        "gallery_previews": [None, None, None, "kept.jpg"],
    }]
    written = attach_previews(rows, str(tmp_path / "previews"), str(tmp_path))

    row = rows[0]
    assert written == 2
    assert row["cover_preview"] == "previews/interior-4-cover.jpg"
    assert row["gallery_previews"] == ["previews/interior-4-0.jpg", None, None, "kept.jpg"]
    assert (tmp_path / "previews" / "interior-4-0.jpg").exists()


def test_attach_previews_file_rewrites_catalog(tmp_path):
    _image(tmp_path / "a.png")
    catalog = tmp_path / "catalog.json"
    catalog.write_text(json.dumps({"interiors": [{"id": 1, "gallery_images": ["a.png"]}]}),
                       encoding="utf-8")

    assert attach_previews_file(str(catalog), str(tmp_path / "previews")) == 1
    data = json.loads(catalog.read_text(encoding="utf-8"))
    assert data["interiors"][0]["gallery_previews"] == ["previews/interior-1-0.jpg"]


def test_attach_previews_reads_and_writes_camel_case_rows(tmp_path):
    _image(tmp_path / "a.png")
    _image(tmp_path / "cover.png")
    rows = [{"id": 1, "coverImage": "cover.png", "galleryImages": ["a.png"]}]

    assert attach_previews(rows, str(tmp_path / "previews"), str(tmp_path)) == 2
    row = rows[0]
    assert row["coverPreview"] == "previews/interior-1-cover.jpg"
    assert row["galleryPreviews"] == ["previews/interior-1-0.jpg"]
    assert "gallery_previews" not in row and "cover_preview" not in row
