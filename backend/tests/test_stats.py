"""Tests for the file counter."""

from __future__ import annotations

import base64

import pytest

from earlbox.exceptions import SizeMismatchError
from earlbox.services import ingest, stats


async def upload(db, store, data: bytes, size: int | None = None):
    return await ingest.upload_file(
        db,
        store,
        original_name="f.txt",
        file_data=base64.b64encode(data).decode("ascii"),
        mime_type="text/plain",
        file_size=len(data) if size is None else size,
    )


@pytest.mark.asyncio
async def test_empty_catalog(db):
    result = await stats.get_stats(db)
    assert result.total_files == 0


@pytest.mark.asyncio
async def test_counts_committed_uploads(db, store):
    for i in range(3):
        await upload(db, store, f"file {i}".encode())

    assert (await stats.get_stats(db)).total_files == 3


@pytest.mark.asyncio
async def test_repeated_calls_are_stable(db, store):
    await upload(db, store, b"one")

    counts = [(await stats.get_stats(db)).total_files for _ in range(5)]

    assert counts == [1] * 5


@pytest.mark.asyncio
async def test_failed_uploads_are_not_counted(db, store):
    await upload(db, store, b"kept")
    with pytest.raises(SizeMismatchError):
        await upload(db, store, b"rejected", size=1)

    assert (await stats.get_stats(db)).total_files == 1


@pytest.mark.asyncio
async def test_count_visible_from_other_sessions(session_factory, store):
    async with session_factory() as writer:
        await upload(writer, store, b"shared")

    async with session_factory() as reader:
        assert (await stats.get_stats(reader)).total_files == 1
