"""Tests for merging per-run CSV files."""

from clmm_probe.reporting.merge import MERGED_NAME, merge_csv_dir


def write(path, text):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text)


class TestMergeCsvDir:
    def test_merges_with_single_header(self, tmp_path):
        write(tmp_path / "a.csv", "h1,h2\n1,2\n3,4\n")
        write(tmp_path / "nested" / "b.csv", "h1,h2\n5,6\n")

        out = merge_csv_dir(tmp_path)

        assert out == tmp_path / MERGED_NAME
        assert out.read_text() == "h1,h2\n1,2\n3,4\n5,6\n"

    def test_previous_output_not_an_input(self, tmp_path):
        write(tmp_path / "a.csv", "h\n1\n")
        merge_csv_dir(tmp_path)

        out = merge_csv_dir(tmp_path)

        assert out.read_text() == "h\n1\n"

    def test_empty_directory(self, tmp_path):
        assert merge_csv_dir(tmp_path) is None
        assert not (tmp_path / MERGED_NAME).exists()

    def test_empty_files_only(self, tmp_path):
        write(tmp_path / "a.csv", "")
        assert merge_csv_dir(tmp_path) is None
