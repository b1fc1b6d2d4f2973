from __future__ import annotations

import pytest

from blobtour.steps import downloader
from blobtour.steps.downloader import (
    copy_into,
    download_blobs,
    download_file_name,
    make_temp_dir,
)
from blobtour.steps.results import ErrorKind, Stage


def test_download_file_name_is_derived_from_blob_name():
    assert download_file_name("wtfile1.txt") == "wtfile1.txt_DOWNLOADED.txt"
    assert download_file_name("nested/dir/x.txt") == "nested_dir_x.txt_DOWNLOADED.txt"


def test_make_temp_dir_is_fresh(tmp_path):
    first = make_temp_dir(tmp_path)
    second = make_temp_dir(tmp_path)

    assert first != second
    assert first.is_dir() and second.is_dir()
    assert first.parent == tmp_path


def test_copy_into_overwrites_and_skips_directories(tmp_path):
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.mkdir()
    dst.mkdir()
    (src / "a.txt").write_text("new")
    (src / "sub").mkdir()
    (dst / "a.txt").write_text("old")

    copied = copy_into(src, dst)

    assert copied == [dst / "a.txt"]
    assert (dst / "a.txt").read_text() == "new"
    assert not (dst / "sub").exists()


@pytest.mark.anyio("asyncio")
async def test_download_scenario(container, pace, tmp_path, capsys):
    persistent = tmp_path / "files"
    persistent.mkdir()
    container.blobs["wtfileabc.txt"] = b"Hello, World!"

    result = await download_blobs(
        container, persistent, temp_root=tmp_path / "scratch", pace=pace
    )

    assert result.ok
    assert result.stage is Stage.DOWNLOADING
    target = persistent / "wtfileabc.txt_DOWNLOADED.txt"
    assert target.read_text() == "Hello, World!"
    assert result.data["copied"] == [target]
    assert [p.name for p in result.data["downloaded"]] == ["wtfileabc.txt_DOWNLOADED.txt"]
    assert not result.data["temp_dir"].exists()

    out = capsys.readouterr().out
    assert "Downloading blob to" in out
    assert f"Copying downloaded files to persistent directory: {persistent}" in out
    assert pace.messages == ["Press 'Enter' to continue."]


@pytest.mark.anyio("asyncio")
async def test_download_overwrites_previous_copy(container, tmp_path):
    persistent = tmp_path / "files"
    persistent.mkdir()
    (persistent / "a.txt_DOWNLOADED.txt").write_text("stale")
    container.blobs["a.txt"] = b"fresh"

    result = await download_blobs(container, persistent, temp_root=tmp_path)

    assert result.ok
    assert (persistent / "a.txt_DOWNLOADED.txt").read_text() == "fresh"


@pytest.mark.anyio("asyncio")
async def test_download_failure_still_removes_temp_dir(container, pace, tmp_path, capsys):
    persistent = tmp_path / "files"
    persistent.mkdir()
    container.blobs.update({"good.txt": b"ok", "zbad.txt": b"boom"})
    container.download_errors.add("zbad.txt")

    result = await download_blobs(
        container, persistent, temp_root=tmp_path / "scratch", pace=pace
    )

    assert not result.ok
    assert result.error_kind is ErrorKind.UNEXPECTED
    assert not result.data["temp_dir"].exists()
    assert list((tmp_path / "scratch").iterdir()) == []
    assert list(persistent.iterdir()) == []
    assert "Error downloading blobs: " in capsys.readouterr().out
    assert pace.messages == []


@pytest.mark.anyio("asyncio")
async def test_missing_persistent_dir_is_reported(container, tmp_path):
    container.blobs["a.txt"] = b"a"

    result = await download_blobs(container, tmp_path / "nope", temp_root=tmp_path)

    assert not result.ok
    assert isinstance(result.error, str)
    assert not result.data["temp_dir"].exists()


@pytest.mark.anyio("asyncio")
async def test_empty_container_downloads_nothing(container, tmp_path):
    persistent = tmp_path / "files"
    persistent.mkdir()

    result = await download_blobs(container, persistent, temp_root=tmp_path / "scratch")

    assert result.ok
    assert result.data["downloaded"] == []
    assert list(persistent.iterdir()) == []


@pytest.mark.anyio("asyncio")
async def test_cleanup_error_does_not_mask_result(container, tmp_path, monkeypatch):
    persistent = tmp_path / "files"
    persistent.mkdir()
    container.blobs["a.txt"] = b"a"
    real_rmtree = downloader.shutil.rmtree

    def _rmtree_then_fail(path, *args, **kwargs):
        real_rmtree(path, *args, **kwargs)
        raise PermissionError(f"locked: {path}")

    monkeypatch.setattr(downloader.shutil, "rmtree", _rmtree_then_fail)

    result = await download_blobs(container, persistent, temp_root=tmp_path / "scratch")

    assert result.ok
    assert result.stage is Stage.DOWNLOADING
    assert (persistent / "a.txt_DOWNLOADED.txt").read_bytes() == b"a"
    assert not result.data["temp_dir"].exists()
