"""
Unit tests for the pure domain logic: configuration normalization, content
hashing and output key derivation. No storage, broker or subprocess involved.
"""

import hashlib
import io

import pytest

from video_processor.domain import (
    DEFAULT_PROCESSING_CONFIG,
    ProcessingConfig,
    ProcessingConfigInput,
    derive_output_key,
    hash_while_writing,
    normalize_config,
)
from video_processor.exceptions import ErrorKind, InvalidInputError


class TestNormalizeConfig:
    def test_none_returns_defaults(self):
        config = normalize_config(None)
        assert config == ProcessingConfig(frame_rate=1.0, output_format="jpg")

    @pytest.mark.parametrize("output_format", ["jpg", "JPG", "jpeg", "JPEG", " Jpeg\t"])
    def test_jpeg_variants_normalize_to_jpg(self, output_format):
        config = normalize_config(ProcessingConfigInput(frame_rate=2.0, output_format=output_format))
        assert config.output_format == "jpg"

    @pytest.mark.parametrize("output_format", ["png", "PNG", "  png "])
    def test_png_variants(self, output_format):
        config = normalize_config(ProcessingConfigInput(frame_rate=2.0, output_format=output_format))
        assert config.output_format == "png"

    @pytest.mark.parametrize("frame_rate", [0.0, -1.0, -0.0001, float("nan")])
    def test_non_positive_frame_rate_uses_default(self, frame_rate):
        config = normalize_config(ProcessingConfigInput(frame_rate=frame_rate, output_format="png"))
        assert config.frame_rate == 1.0

    @pytest.mark.parametrize("frame_rate", [0.1, 1.0, 29.97, 60.0])
    def test_positive_frame_rate_is_kept(self, frame_rate):
        config = normalize_config(ProcessingConfigInput(frame_rate=frame_rate, output_format="jpg"))
        assert config.frame_rate == frame_rate

    @pytest.mark.parametrize("output_format", ["gif", "tiff", "jp g", "mp4"])
    def test_unsupported_format_is_invalid_input(self, output_format):
        with pytest.raises(InvalidInputError, match="unsupported output_format") as exc_info:
            normalize_config(ProcessingConfigInput(frame_rate=1.0, output_format=output_format))
        assert exc_info.value.kind is ErrorKind.INVALID_INPUT

    @pytest.mark.parametrize("output_format", ["", "   ", "\t"])
    def test_blank_format_is_invalid_input(self, output_format):
        with pytest.raises(InvalidInputError, match="unsupported output_format"):
            normalize_config(ProcessingConfigInput(frame_rate=3.0, output_format=output_format))

    def test_omitted_format_is_invalid_input(self):
        with pytest.raises(InvalidInputError):
            normalize_config(ProcessingConfigInput(frame_rate=2.0))

    def test_explicit_defaults_are_honoured(self):
        defaults = ProcessingConfig(frame_rate=5.0, output_format="png")

        assert normalize_config(None, defaults) is defaults
        config = normalize_config(ProcessingConfigInput(frame_rate=0, output_format="PNG"), defaults)
        assert config == defaults

    def test_module_defaults(self):
        assert DEFAULT_PROCESSING_CONFIG.frame_rate == 1.0
        assert DEFAULT_PROCESSING_CONFIG.output_format == "jpg"


class TestHashWhileWriting:
    def test_writes_all_bytes_and_returns_sha256(self):
        sink = io.BytesIO()
        chunks = [b"hello ", b"frame ", b"world"]

        digest = hash_while_writing(sink, chunks)

        assert sink.getvalue() == b"hello frame world"
        assert digest == hashlib.sha256(b"hello frame world").hexdigest()

    def test_digest_is_lowercase_hex_of_fixed_length(self):
        digest = hash_while_writing(io.BytesIO(), [b"\x00\xff" * 100])
        assert len(digest) == 64
        assert digest == digest.lower()
        int(digest, 16)

    def test_empty_stream(self):
        sink = io.BytesIO()
        assert hash_while_writing(sink, []) == hashlib.sha256(b"").hexdigest()
        assert sink.getvalue() == b""

    def test_chunking_does_not_affect_digest(self):
        data = bytes(range(256)) * 10
        whole = hash_while_writing(io.BytesIO(), [data])
        pieces = hash_while_writing(io.BytesIO(), (data[i : i + 7] for i in range(0, len(data), 7)))
        assert whole == pieces

    def test_consumes_generator_once(self):
        consumed = []

        def stream():
            for chunk in (b"a", b"b", b"c"):
                consumed.append(chunk)
                yield chunk

        hash_while_writing(io.BytesIO(), stream())
        assert consumed == [b"a", b"b", b"c"]


class TestDeriveOutputKey:
    def test_uses_digest_and_zip_extension(self):
        digest = hashlib.sha256(b"d" * 15).hexdigest()
        assert derive_output_key(digest) == f"processed/{digest}.zip"

    def test_custom_extension(self):
        assert derive_output_key("abc", ".tar") == "processed/abc.tar"

    def test_distinct_digests_give_distinct_keys(self):
        first = hashlib.sha256(b"one").hexdigest()
        second = hashlib.sha256(b"two").hexdigest()
        assert derive_output_key(first) != derive_output_key(second)
