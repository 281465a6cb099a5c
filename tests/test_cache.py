from aofs.cache import ScratchSpace
from aofs.interfaces import IScratchSpace

import os
import pytest
import stat


@pytest.fixture
def scratch(tmp_path):
    return ScratchSpace(str(tmp_path / "scratch"))


class TestInterface:
    def test_interface_provided(self, scratch):
        assert IScratchSpace.providedBy(scratch)


class TestCreate:
    def test_creates_directory(self, tmp_path):
        cache_dir = tmp_path / "nested" / "scratch"
        ScratchSpace(str(cache_dir))
        assert cache_dir.is_dir()

    def test_directory_permissions(self, tmp_path):
        cache_dir = tmp_path / "private"
        ScratchSpace(str(cache_dir))
        mode = stat.S_IMODE(os.stat(cache_dir).st_mode)
        assert mode & 0o077 == 0

    def test_create_returns_empty_file(self, scratch):
        with scratch.create() as f:
            assert os.path.getsize(f.name) == 0
            assert f.tell() == 0

    def test_create_is_read_write_binary(self, scratch):
        with scratch.create() as f:
            f.write(b"scratch data")
            f.seek(0)
            assert f.read() == b"scratch data"

    def test_create_places_file_in_cache_dir(self, scratch):
        with scratch.create() as f:
            assert os.path.dirname(f.name) == scratch.cache_dir
            assert os.path.basename(f.name).startswith("s3-")

    def test_create_names_are_unique(self, scratch):
        files = [scratch.create() for _ in range(5)]
        assert len({f.name for f in files}) == 5
        for f in files:
            f.close()

    def test_default_directory_is_system_temp(self):
        scratch = ScratchSpace()
        f = scratch.create()
        try:
            assert os.path.exists(f.name)
        finally:
            f.close()
            scratch.remove(f.name)
        assert not os.path.exists(f.name)


class TestRemove:
    def test_remove_deletes_file(self, scratch):
        f = scratch.create()
        f.close()
        scratch.remove(f.name)
        assert not os.path.exists(f.name)
        assert scratch.list_files() == []

    def test_remove_missing_raises(self, scratch):
        with pytest.raises(FileNotFoundError):
            scratch.remove(os.path.join(scratch.cache_dir, "s3-missing"))


class TestAccounting:
    def test_list_files(self, scratch):
        a = scratch.create()
        b = scratch.create()
        assert scratch.list_files() == sorted([a.name, b.name])
        a.close()
        b.close()

    def test_list_files_ignores_foreign_files(self, scratch):
        with open(os.path.join(scratch.cache_dir, "other.txt"), "w") as f:
            f.write("not scratch")
        assert scratch.list_files() == []

    def test_current_size(self, scratch):
        with scratch.create() as a, scratch.create() as b:
            a.write(b"x" * 100)
            b.write(b"y" * 50)
            a.flush()
            b.flush()
            assert scratch.current_size() == 150
