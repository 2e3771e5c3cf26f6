import numpy as np
import pytest

from conjugax.core.errors import InvalidInput
from conjugax.data.loaders import load_sample, sample_from_config


def write_csv(path, text):
    path.write_text(text)
    return path


def test_load_first_column_by_default(tmp_path):
    csv = write_csv(tmp_path / "counts.csv", "goals,minute\n3,10\n5,20\n2,30\n4,40\n")
    np.testing.assert_array_equal(load_sample(csv), [3, 5, 2, 4])


def test_load_named_column_drops_missing(tmp_path):
    csv = write_csv(tmp_path / "flips.csv", "id,flip\n1,1\n2,\n3,0\n4,n/a\n5,1\n")
    np.testing.assert_array_equal(load_sample(csv, column="flip"), [1, 0, 1])


def test_load_missing_column(tmp_path):
    csv = write_csv(tmp_path / "x.csv", "a\n1\n")
    with pytest.raises(InvalidInput):
        load_sample(csv, column="b")


def test_load_passes_read_csv_options(tmp_path):
    csv = write_csv(tmp_path / "x.tsv", "value\n1.5\n2.5\n")
    np.testing.assert_allclose(load_sample(csv, sep="\t"), [1.5, 2.5])


def test_sample_from_inline_config():
    np.testing.assert_allclose(sample_from_config({"data": [15.77, 20.5]}), [15.77, 20.5])


def test_sample_from_csv_config_is_relative_to_base_dir(tmp_path):
    write_csv(tmp_path / "flips.csv", "flip\n1\n0\n0\n")
    sample = sample_from_config({"csv": {"path": "flips.csv", "column": "flip"}}, base_dir=tmp_path)
    np.testing.assert_array_equal(sample, [1, 0, 0])

    sample = sample_from_config({"csv": "flips.csv"}, base_dir=tmp_path)
    np.testing.assert_array_equal(sample, [1, 0, 0])


def test_sample_from_config_needs_a_source():
    with pytest.raises(InvalidInput):
        sample_from_config({"path": "nowhere.csv"})
