"""Tests for batch font generation."""

import threading
from pathlib import Path

import pytest
from fontTools.ttLib import TTFont

from minify_font.config.formats import VALID_FONT_TYPES
from minify_font.core.charset import subset_from_text
from minify_font.core.codec import CodecOptions
from minify_font.core.output_paths import PlannedOutput, resolve_output_paths
from minify_font.errors import InputNotFound, SetupFailure, ValidationError
from minify_font.operations import generate
from minify_font.operations.generate import (
    GenerationOutcome,
    create_web_fonts,
    generate_fonts,
    minify_font_file,
)


class FakeCodec:
    """Records calls and fails for selected target formats."""

    def __init__(self, fail_for=()):
        self.fail_for = set(fail_for)
        self.calls = []
        self.lock = threading.Lock()

    def __call__(self, data, source_format, target_format, code_points, options):
        with self.lock:
            self.calls.append((source_format, target_format, tuple(code_points), options))
        if target_format in self.fail_for:
            raise RuntimeError(f"{target_format} exploded")
        return f"FONT:{target_format}".encode()


def test_one_failure_does_not_affect_others(test_font, tmp_path):
    """A failing format is recorded while its siblings still succeed."""
    plan = resolve_output_paths(test_font, tmp_path / "dist", ["woff2", "woff", "ttf"])
    codec = FakeCodec(fail_for={"woff"})

    result = generate_fonts(test_font, subset_from_text("AB"), plan, convert=codec)

    assert len(result.outcomes) == 3
    assert [o.format for o in result.outcomes] == ["woff2", "woff", "ttf"]
    assert [o.success for o in result.outcomes] == [True, False, True]

    failed = result.outcomes[1]
    assert isinstance(failed.error, RuntimeError)
    assert not failed.path.exists()
    for outcome in result.succeeded:
        assert outcome.error is None
        assert outcome.path.read_bytes() == f"FONT:{outcome.format}".encode()


def test_all_formats_fail_without_raising(test_font, tmp_path):
    plan = resolve_output_paths(test_font, tmp_path, ["ttf", "woff"])
    result = generate_fonts(test_font, subset_from_text("A"), plan, convert=FakeCodec({"ttf", "woff"}))
    assert result.succeeded == []
    assert len(result.failed) == 2


def test_outcomes_follow_request_order(test_font, tmp_path):
    """Result order matches the plan even when jobs finish in reverse."""
    last_done = threading.Event()
    finished = []

    def codec(data, source_format, target_format, code_points, options):
        if target_format == "ttf":
            assert last_done.wait(timeout=10)
        finished.append(target_format)
        if target_format == "woff2":
            last_done.set()
        return b"data"

    plan = resolve_output_paths(test_font, tmp_path, ["ttf", "woff", "woff2"])
    result = generate_fonts(test_font, subset_from_text("A"), plan, convert=codec)

    assert finished[-1] == "ttf"
    assert [o.format for o in result.outcomes] == ["ttf", "woff", "woff2"]
    assert all(o.success for o in result.outcomes)


def test_codec_receives_source_format_subset_and_options(test_font, tmp_path):
    codec = FakeCodec()
    options = CodecOptions({"hinting": False}, {"reorder_tables": False})
    plan = resolve_output_paths(test_font, tmp_path, ["woff2"])

    generate_fonts(test_font, subset_from_text("BAB"), plan, options, convert=codec)

    assert codec.calls == [("ttf", "woff2", (ord("B"), ord("A")), options)]


def test_missing_input_is_fatal_before_any_job(tmp_path):
    """Setup failures raise and no conversion starts."""
    codec = FakeCodec()
    missing = tmp_path / "missing.ttf"
    plan = resolve_output_paths(missing, tmp_path / "dist", ["ttf"])

    with pytest.raises(InputNotFound):
        generate_fonts(missing, subset_from_text("A"), plan, convert=codec)

    assert codec.calls == []
    assert not (tmp_path / "dist").exists()


def test_uncreatable_directory_is_setup_failure(test_font, tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    plan = [PlannedOutput("ttf", blocker / "sub" / "font.ttf")]

    with pytest.raises(SetupFailure):
        generate_fonts(test_font, subset_from_text("A"), plan, convert=FakeCodec())


def test_empty_plan_is_rejected(test_font):
    with pytest.raises(ValidationError):
        generate_fonts(test_font, subset_from_text("A"), [], convert=FakeCodec())


def test_creates_nested_output_directories(test_font, tmp_path):
    plan = [
        PlannedOutput("ttf", tmp_path / "a" / "b" / "font.ttf"),
        PlannedOutput("woff", tmp_path / "a" / "c" / "font.woff"),
    ]
    result = generate_fonts(test_font, subset_from_text("A"), plan, convert=FakeCodec())

    assert all(o.success for o in result.outcomes)
    assert result.output_dir == tmp_path / "a"


def test_invalid_format_fails_only_that_format(test_font, tmp_path):
    plan = resolve_output_paths(test_font, tmp_path, ["ttf", "pdf"])
    result = generate_fonts(test_font, subset_from_text("A"), plan, convert=FakeCodec())

    assert result.outcomes[0].success
    assert not result.outcomes[1].success
    assert "Invalid output font type: pdf" in str(result.outcomes[1].error)


def test_real_codec_all_formats(test_font, tmp_path):
    """Every supported container is produced by the real codec."""
    plan = resolve_output_paths(test_font, tmp_path / "out", VALID_FONT_TYPES)
    result = generate_fonts(test_font, subset_from_text("AB中"), plan)

    assert [o.format for o in result.outcomes] == VALID_FONT_TYPES
    assert all(o.success for o in result.outcomes), [o.error for o in result.failed]

    woff2 = TTFont(tmp_path / "out" / "TestSans.min.woff2")
    assert set(woff2.getBestCmap()) == {ord("A"), ord("B"), 0x4E2D}


def test_real_codec_empty_subset(test_font, tmp_path):
    """An empty custom text still yields a readable font."""
    plan = resolve_output_paths(test_font, tmp_path, ["ttf"])
    result = generate_fonts(test_font, subset_from_text(""), plan)

    assert result.outcomes[0].success
    font = TTFont(result.outcomes[0].path)
    assert font.getGlyphOrder()[0] == ".notdef"


def test_generation_outcome_invariant():
    """error is present exactly when success is False."""
    with pytest.raises(ValueError):
        GenerationOutcome("ttf", Path("a.ttf"), True, RuntimeError())
    with pytest.raises(ValueError):
        GenerationOutcome("ttf", Path("a.ttf"), False)


def test_minify_font_file(test_font, tmp_path):
    output = tmp_path / "single" / "font.woff"
    minify_font_file(test_font, output, [ord("C")])

    font = TTFont(output)
    assert font.flavor == "woff"
    assert set(font.getBestCmap()) == {ord("C")}


def test_minify_font_file_validation(test_font, tmp_path):
    with pytest.raises(InputNotFound, match="does not exist"):
        minify_font_file(tmp_path / "nope.ttf", tmp_path / "out.ttf", [])
    with pytest.raises(ValidationError, match="Invalid output font type: pdf"):
        minify_font_file(test_font, tmp_path / "out.pdf", [])

    pdf = tmp_path / "font.pdf"
    pdf.write_bytes(b"%PDF")
    with pytest.raises(ValidationError, match="Invalid input font type: pdf"):
        minify_font_file(pdf, tmp_path / "out.ttf", [])


def test_create_web_fonts_defaults(test_font):
    """Default formats go to an output directory beside the input."""
    result = create_web_fonts(test_font, "ABC")

    output_dir = test_font.parent / "output"
    assert result.output_dir == output_dir
    assert [o.format for o in result.outcomes] == ["woff2", "woff", "ttf"]
    assert [o.path for o in result.outcomes] == [
        output_dir / "TestSans.woff2",
        output_dir / "TestSans.woff",
        output_dir / "TestSans.ttf",
    ]
    assert all(o.success and o.path.exists() for o in result.outcomes)


def test_create_web_fonts_custom_names(test_font, tmp_path):
    result = create_web_fonts(
        test_font,
        "A",
        output_dir=tmp_path / "web",
        resolve_file_name=lambda basename, ext: f"{basename}.min.{ext}",
        formats=["woff2"],
    )
    assert result.outcomes[0].path == tmp_path / "web" / "TestSans.min.woff2"
    assert result.outcomes[0].success


def test_create_web_fonts_validation(test_font):
    with pytest.raises(ValidationError, match="input parameter is required"):
        create_web_fonts("", "A")
    with pytest.raises(ValidationError, match="text parameter is required"):
        create_web_fonts(test_font, None)
    with pytest.raises(ValidationError, match="formats must be a non-empty list"):
        create_web_fonts(test_font, "A", formats=[])


def test_failure_after_write_stays_in_outcome(test_font, tmp_path, monkeypatch):
    """An error while reporting a written file fails only that format."""
    def broken_size(path):
        raise OSError("stat failed")

    monkeypatch.setattr(generate, "get_font_size_kb", broken_size)
    plan = resolve_output_paths(test_font, tmp_path / "dist", ["ttf", "woff"])

    result = generate_fonts(test_font, subset_from_text("A"), plan, convert=FakeCodec())

    assert [o.format for o in result.outcomes] == ["ttf", "woff"]
    assert not any(o.success for o in result.outcomes)
    assert all("stat failed" in str(o.error) for o in result.outcomes)


def test_output_over_input_is_rejected(test_font):
    """A plan that would rewrite the source font fails before any job runs."""
    original = test_font.read_bytes()
    codec = FakeCodec()
    plan = resolve_output_paths(test_font, test_font.parent / "TestSans.woff2", ["ttf", "woff2"])
    assert plan[0].path == test_font

    with pytest.raises(ValidationError, match="overwrite the input"):
        generate_fonts(test_font, subset_from_text("A"), plan, max_workers=1, convert=codec)

    assert codec.calls == []
    assert test_font.read_bytes() == original


def test_minify_font_file_refuses_to_overwrite_input(test_font):
    with pytest.raises(ValidationError):
        minify_font_file(test_font, test_font, [ord("A")], convert=FakeCodec())


def test_colliding_output_paths_are_rejected(test_font, tmp_path):
    codec = FakeCodec()
    plan = [
        PlannedOutput("ttf", tmp_path / "font.bin"),
        PlannedOutput("woff", tmp_path / "font.bin"),
    ]
    with pytest.raises(ValidationError, match="both write to"):
        generate_fonts(test_font, subset_from_text("A"), plan, convert=codec)
    assert codec.calls == []


def test_create_web_fonts_dedupes_formats(test_font, tmp_path):
    result = create_web_fonts(test_font, "AB", tmp_path, formats=["woff2", "ttf", "woff2"])

    assert [o.format for o in result.outcomes] == ["woff2", "ttf"]
    assert all(o.success for o in result.outcomes)


def test_create_web_fonts_rejects_constant_file_name(test_font, tmp_path):
    with pytest.raises(ValidationError):
        create_web_fonts(
            test_font,
            "AB",
            tmp_path,
            resolve_file_name=lambda basename, ext: "font.bin",
        )
    assert list(tmp_path.iterdir()) == [test_font.parent]
