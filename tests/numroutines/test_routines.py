"""
Tests for routines: argument/file checks, extrema and the numeric
comparator.
"""
import functools

import numpy as np
import pytest

from numroutines.errors import ArgumentCountError, FileOpenError
from numroutines.routines import (
    array_max,
    array_min,
    check_args,
    check_file,
    compare_doubles,
    fopen_safe,
    max_three,
    sort_doubles,
)

RNG = np.random.default_rng(2)


class TestCheckArgs:
    def test_matching_count_passes(self):
        check_args(["prog", "a", "b"], 3)

    def test_wrong_count_raises(self):
        with pytest.raises(ArgumentCountError) as excinfo:
            check_args(["prog"], 3)
        assert excinfo.value.argc == 1
        assert excinfo.value.expected == 3
        assert "argc == 1" in str(excinfo.value)


class TestFiles:
    def test_check_file_existing(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("1.0\n")
        assert check_file(path)

    def test_check_file_missing(self, tmp_path):
        assert not check_file(tmp_path / "missing.txt")

    def test_fopen_safe_reads(self, tmp_path):
        path = tmp_path / "data.txt"
        path.write_text("42\n")
        with fopen_safe(path) as fp:
            assert fp.read() == "42\n"

    def test_fopen_safe_writes(self, tmp_path):
        path = tmp_path / "out.txt"
        with fopen_safe(path, "w") as fp:
            fp.write("x")
        assert path.read_text() == "x"

    def test_fopen_safe_missing_raises(self, tmp_path):
        with pytest.raises(FileOpenError) as excinfo:
            fopen_safe(tmp_path / "nope" / "missing.txt")
        assert isinstance(excinfo.value, OSError)
        assert isinstance(excinfo.value.__cause__, FileNotFoundError)


class TestExtrema:
    def test_max_three(self):
        assert max_three(1.0, 3.0, 2.0) == 3.0
        assert max_three(-1.0, -3.0, -2.0) == -1.0

    def test_array_max_min(self):
        x = RNG.standard_normal(20)
        assert array_max(x) == x.max()
        assert array_min(x) == x.min()

    def test_leading_elements_only(self):
        x = [1.0, 5.0, 100.0, -100.0]
        assert array_max(x, 2) == 5.0
        assert array_min(x, 2) == 1.0

    def test_empty_raises(self):
        with pytest.raises(ValueError):
            array_max([])


class TestCompareDoubles:
    def test_three_way(self):
        assert compare_doubles(1.0, 2.0) == -1
        assert compare_doubles(2.0, 1.0) == 1
        assert compare_doubles(2.0, 2.0) == 0

    def test_sorts_ascending(self):
        x = RNG.standard_normal(50)
        ordered = sorted(x.tolist(), key=functools.cmp_to_key(compare_doubles))
        np.testing.assert_array_equal(ordered, np.sort(x))

    def test_sort_doubles(self):
        out = sort_doubles([3.0, -1.0, 2.0, 2.0])
        np.testing.assert_array_equal(out, [-1.0, 2.0, 2.0, 3.0])
        assert out.dtype == np.float64
