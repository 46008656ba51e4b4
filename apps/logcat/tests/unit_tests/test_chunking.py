"""
Unit tests for message chunking.

Covers boundary lengths, exact reconstruction and the atomicity of chunk
sequences emitted from concurrent threads.
"""

from __future__ import annotations

import math
import threading
import time

import pytest

from logcat.chunking import MAX_CHUNK_LENGTH, Chunker, split_message


class TestSplitMessage:
    """split_message boundaries"""

    def test_default_limit(self) -> None:
        assert MAX_CHUNK_LENGTH == 3800

    def test_short_message_is_one_chunk(self) -> None:
        assert split_message("hello") == ["hello"]

    def test_empty_message_is_one_chunk(self) -> None:
        assert split_message("") == [""]

    def test_exactly_max_is_one_chunk(self) -> None:
        assert split_message("a" * 3800) == ["a" * 3800]

    def test_one_over_max_is_two_chunks(self) -> None:
        chunks = split_message("a" * 3801)
        assert [len(c) for c in chunks] == [3800, 1]

    @pytest.mark.parametrize("length", [3801, 7600, 7601, 12345])
    def test_chunks_reconstruct_message(self, length: int) -> None:
        message = "".join(chr(ord("a") + i % 26) for i in range(length))
        chunks = split_message(message)
        assert len(chunks) == math.ceil(length / 3800)
        assert "".join(chunks) == message

    def test_split_ignores_content(self) -> None:
        assert split_message("ab\\ncd", max_length=3) == ["ab\\", "ncd"]

    def test_non_positive_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            split_message("abc", max_length=0)


class TestChunker:
    """Chunker emission"""

    def test_direct_path_writes_once(self) -> None:
        written: list[str] = []
        assert Chunker().emit("a" * 3800, written.append) == 1
        assert written == ["a" * 3800]

    def test_chunked_path_writes_in_order(self) -> None:
        written: list[str] = []
        count = Chunker(max_length=4).emit("abcdefghij", written.append)
        assert count == 3
        assert written == ["abcd", "efgh", "ij"]

    def test_invalid_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            Chunker(max_length=-1)

    def test_concurrent_sequences_do_not_interleave(self) -> None:
        chunker = Chunker(max_length=10)
        written: list[str] = []
        start = threading.Barrier(4)

        def write(chunk: str) -> None:
            written.append(chunk)
            time.sleep(0.0005)

        def worker(letter: str) -> None:
            start.wait()
            chunker.emit(letter * 100, write)

        threads = [threading.Thread(target=worker, args=(letter,)) for letter in "abcd"]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(written) == 40
        # Every run of identical chunks must be a full 10-chunk sequence
        runs = [written[i : i + 10] for i in range(0, 40, 10)]
        for run in runs:
            assert len({chunk[0] for chunk in run}) == 1
        assert sorted(run[0][0] for run in runs) == ["a", "b", "c", "d"]
