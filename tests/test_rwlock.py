"""Tests for fir._internal.rwlock."""

import threading
import time

from fir._internal.rwlock import ReadWriteLock


class TestReadWriteLock:
    def test_readers_share(self):
        lock = ReadWriteLock()
        inside = threading.Barrier(2, timeout=2)

        def reader():
            with lock.read():
                inside.wait()

        threads = [threading.Thread(target=reader) for _ in range(2)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=3)
        assert not any(t.is_alive() for t in threads)

    def test_writer_excludes_readers(self):
        lock = ReadWriteLock()
        events = []

        def writer():
            with lock.write():
                events.append("write-start")
                time.sleep(0.05)
                events.append("write-end")

        def reader():
            time.sleep(0.01)
            with lock.read():
                events.append("read")

        threads = [threading.Thread(target=writer), threading.Thread(target=reader)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert events == ["write-start", "write-end", "read"]

    def test_released_after_error(self):
        lock = ReadWriteLock()
        try:
            with lock.write():
                raise RuntimeError("boom")
        except RuntimeError:
            pass
        with lock.read():
            pass
