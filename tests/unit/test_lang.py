"""
Tests for file kind detection (lang.py).
"""
import pytest
from bytebolt.utils.lang import SUPPORTED_EXTENSIONS, is_python_file, source_label


class TestIsPythonFile:

    @pytest.mark.parametrize("path", ["main.py", "/home/user/pkg/mod.py", "SCRIPT.PY", "a.Py"])
    def test_python_files(self, path):
        assert is_python_file(path)

    @pytest.mark.parametrize("path", ["main.pyc", "main.rs", "README", "notes.py.txt", ""])
    def test_other_files(self, path):
        assert not is_python_file(path)

    def test_none(self):
        assert not is_python_file(None)

    def test_supported_extensions(self):
        assert SUPPORTED_EXTENSIONS == {".py"}


class TestSourceLabel:

    def test_with_file(self):
        assert source_label("/home/user/main.py").endswith("main.py")

    def test_without_file(self):
        assert source_label(None) == "NO FILE"
