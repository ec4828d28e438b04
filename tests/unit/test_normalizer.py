"""Testes da normalizacao de entrada de audio."""

from __future__ import annotations

import asyncio
import base64
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from voice_processor._types import Base64Payload, RemoteUrl, UploadedFile
from voice_processor.exceptions import (
    DownloadError,
    InvalidAudioPayloadError,
    MissingInputError,
)
from voice_processor.pipeline import normalizer
from voice_processor.pipeline.normalizer import (
    decode_base64_audio,
    materialize,
    resolve_audio_input,
)


def _make_downloader(content: bytes = b"remote-audio") -> MagicMock:
    downloader = MagicMock()

    async def _download(url: str, dest: Path) -> Path:
        dest.write_bytes(content)
        return dest

    downloader.download = AsyncMock(side_effect=_download)
    return downloader


class TestResolveAudioInput:
    def test_missing_everything_raises(self) -> None:
        with pytest.raises(MissingInputError):
            resolve_audio_input()

    def test_empty_strings_count_as_missing(self) -> None:
        with pytest.raises(MissingInputError):
            resolve_audio_input(audio_url="", audio_base64="")

    def test_upload_wins_over_base64_and_url(self, tmp_path: Path) -> None:
        upload = tmp_path / "upload.mp3"
        audio = resolve_audio_input(
            file_path=upload,
            audio_url="https://example.com/a.mp3",
            audio_base64="QUJD",
        )
        assert audio == UploadedFile(local_path=upload)

    def test_base64_wins_over_url(self) -> None:
        audio = resolve_audio_input(audio_url="https://example.com/a.mp3", audio_base64="QUJD")
        assert audio == Base64Payload(data="QUJD")

    def test_url_alone(self) -> None:
        audio = resolve_audio_input(audio_url="https://example.com/a.mp3")
        assert audio == RemoteUrl(url="https://example.com/a.mp3")


class TestDecodeBase64Audio:
    def test_plain_payload(self, sample_audio_bytes: bytes, sample_audio_base64: str) -> None:
        assert decode_base64_audio(sample_audio_base64) == sample_audio_bytes

    def test_data_uri_prefix(self, sample_audio_bytes: bytes, sample_audio_base64: str) -> None:
        data = f"data:audio/mpeg;base64,{sample_audio_base64}"
        assert decode_base64_audio(data) == sample_audio_bytes

    def test_ignores_line_breaks(self, sample_audio_bytes: bytes) -> None:
        encoded = base64.encodebytes(sample_audio_bytes).decode("ascii")
        assert "\n" in encoded
        assert decode_base64_audio(encoded) == sample_audio_bytes

    def test_invalid_characters_raise(self) -> None:
        with pytest.raises(InvalidAudioPayloadError):
            decode_base64_audio("isto nao e base64!!")

    def test_empty_payload_raises(self) -> None:
        with pytest.raises(InvalidAudioPayloadError, match="vazio"):
            decode_base64_audio("data:audio/mpeg;base64,")


class TestMaterialize:
    async def test_base64_writes_then_removes(
        self, scratch_dir: Path, sample_audio_bytes: bytes, sample_audio_base64: str
    ) -> None:
        audio = Base64Payload(data=sample_audio_base64)

        async with materialize(
            audio, scratch_dir=scratch_dir, downloader=_make_downloader()
        ) as path:
            assert path.parent == scratch_dir
            assert path.name.startswith("base64_")
            assert path.read_bytes() == sample_audio_bytes

        assert not path.exists()

    async def test_base64_write_runs_off_event_loop(
        self,
        scratch_dir: Path,
        sample_audio_base64: str,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        calls: list[str] = []
        real_to_thread = asyncio.to_thread

        async def recording_to_thread(func, /, *args, **kwargs):  # type: ignore[no-untyped-def]
            calls.append(func.__name__)
            return await real_to_thread(func, *args, **kwargs)

        monkeypatch.setattr(normalizer.asyncio, "to_thread", recording_to_thread)

        async with materialize(
            Base64Payload(data=sample_audio_base64),
            scratch_dir=scratch_dir,
            downloader=_make_downloader(),
        ) as path:
            assert path.exists()

        assert calls == ["_write_base64_audio"]

    async def test_url_downloads_then_removes(self, scratch_dir: Path) -> None:
        downloader = _make_downloader(b"remote-audio")
        audio = RemoteUrl(url="https://example.com/a.mp3")

        async with materialize(audio, scratch_dir=scratch_dir, downloader=downloader) as path:
            assert path.name.startswith("download_")
            assert path.suffix == ".mp3"
            assert path.read_bytes() == b"remote-audio"

        downloader.download.assert_awaited_once_with("https://example.com/a.mp3", path)
        assert not path.exists()

    async def test_upload_path_is_used_directly_and_removed(self, tmp_path: Path) -> None:
        upload = tmp_path / "upload_1.wav"
        upload.write_bytes(b"uploaded")
        downloader = _make_downloader()

        async with materialize(
            UploadedFile(local_path=upload), scratch_dir=tmp_path, downloader=downloader
        ) as path:
            assert path == upload

        downloader.download.assert_not_awaited()
        assert not upload.exists()

    async def test_removes_file_when_body_raises(
        self, scratch_dir: Path, sample_audio_base64: str
    ) -> None:
        audio = Base64Payload(data=sample_audio_base64)
        seen: list[Path] = []

        with pytest.raises(RuntimeError, match="falha"):
            async with materialize(
                audio, scratch_dir=scratch_dir, downloader=_make_downloader()
            ) as path:
                seen.append(path)
                raise RuntimeError("falha")

        assert seen
        assert not seen[0].exists()

    async def test_partial_download_is_removed(self, scratch_dir: Path) -> None:
        downloader = MagicMock()

        async def _fail(url: str, dest: Path) -> Path:
            dest.write_bytes(b"parcial")
            raise DownloadError(url, "conexao perdida")

        downloader.download = AsyncMock(side_effect=_fail)

        with pytest.raises(DownloadError):
            async with materialize(
                RemoteUrl(url="https://example.com/a.mp3"),
                scratch_dir=scratch_dir,
                downloader=downloader,
            ):
                pass

        assert list(scratch_dir.iterdir()) == []

    async def test_invalid_base64_leaves_nothing_behind(self, scratch_dir: Path) -> None:
        with pytest.raises(InvalidAudioPayloadError):
            async with materialize(
                Base64Payload(data="@@@"), scratch_dir=scratch_dir, downloader=_make_downloader()
            ):
                pass

        assert list(scratch_dir.iterdir()) == []
