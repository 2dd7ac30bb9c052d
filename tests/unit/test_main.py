"""Tests for the command line interface."""

import csv
import json

import pytest
from unittest.mock import patch

from symlogins.cli.main import main
from symlogins.collectors.base import ReportSource


class StaticSource(ReportSource):
    """Report source returning canned report text."""

    reports = {}

    def __init__(self, **kwargs):
        self.kwargs = kwargs

    def is_available(self):
        return True

    def list_arrays(self):
        return list(self.reports)

    def fetch_report(self, array_id):
        return self.reports[array_id]


class TestParseCommand:
    def test_writes_csv(self, isolated_env, write_report, sample_report, multi_login_report):
        write_report("logins-000197901042-20220525-233407.txt", sample_report)
        write_report("logins-000197901043-20220526-010000.txt", multi_login_report)

        assert main(["parse", "--csv", "logins.csv"]) == 0

        with open(isolated_env / "logins.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert len(rows) == 6
        assert rows[0]["directorPort"] == "1D-4"
        assert rows[0]["initiatorName"] == ""
        assert rows[1]["array"] == "000197901043"
        assert rows[5]["sourceFile"] == "logins-000197901043-20220526-010000.txt"

    def test_filter(self, isolated_env, write_report, sample_report, multi_login_report):
        write_report("logins-a.txt", sample_report)
        write_report("logins-b.txt", multi_login_report)

        assert main(["parse", "--filter", "^10000090FA00000[12]", "--csv", "out.csv"]) == 0

        with open(isolated_env / "out.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["portWwn"] for r in rows] == ["10000090fa000001", "10000090fa000002"]

    def test_invalid_filter(self, isolated_env, write_report, sample_report, capsys):
        write_report("logins-a.txt", sample_report)
        assert main(["parse", "--filter", "(unclosed"]) == 1
        assert "Invalid port WWN filter" in capsys.readouterr().err

    def test_json_output(self, isolated_env, write_report, sample_report, capsys):
        write_report("logins-a.txt", sample_report)

        assert main(["parse", "--json"]) == 0

        data = json.loads(capsys.readouterr().out)
        assert data["meta"]["files_processed"] == ["logins-a.txt"]
        assert data["records"][0]["logTime"] == "11:34:07 PM on Wed May 25,2022"

    def test_table_output_and_summary(self, isolated_env, write_report, multi_login_report, capsys):
        write_report("logins-a.txt", multi_login_report)

        assert main(["parse", "--summary"]) == 0

        captured = capsys.readouterr()
        assert "ARRAY" in captured.out
        assert "Total logins:        5" in captured.out
        assert "Processed 1 files, 5 records" in captured.err

    def test_no_input_exits_zero(self, isolated_env, capsys):
        assert main(["parse", "--csv", "out.csv"]) == 0
        assert not (isolated_env / "out.csv").exists()
        assert "No matching login report files" in capsys.readouterr().err

    def test_bad_file_does_not_abort_run(self, isolated_env, write_report, sample_report):
        write_report("logins-a.txt", "Director Port : abc\n")
        write_report("logins-b.txt", sample_report)

        assert main(["parse", "--csv", "out.csv"]) == 0

        with open(isolated_env / "out.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert [r["sourceFile"] for r in rows] == ["logins-b.txt"]

    def test_reset_context_flag(self, isolated_env, write_report, sample_report, capsys):
        write_report("logins-a.txt", sample_report)
        write_report(
            "logins-b.txt",
            "Originator Node wwn : 2000000000000001\nLast Active Log-In : 10:00:00 AM\n",
        )

        assert main(["parse", "--json", "--reset-context"]) == 0

        records = json.loads(capsys.readouterr().out)["records"]
        assert records[0]["array"] == "000197901042"
        assert records[1]["array"] is None

    def test_unwritable_csv_path_exits_one(self, isolated_env, write_report, sample_report, capsys):
        write_report("logins-a.txt", sample_report)

        assert main(["parse", "--csv", "nodir/out.csv"]) == 1

        assert "Error: unable to write nodir/out.csv" in capsys.readouterr().err
        assert not (isolated_env / "nodir").exists()

    @pytest.mark.parametrize(
        "content",
        [
            "symcli:\n  timeout: fast\n",
            "- a\n- b\n",
            "symcli:\n  array_families: 5\n",
        ],
    )
    def test_bad_config_values_exit_one(self, isolated_env, content, capsys):
        config_file = isolated_env / "bad.yaml"
        config_file.write_text(content)

        assert main(["--config", str(config_file), "parse"]) == 1
        assert "Error: unable to load config" in capsys.readouterr().err

    def test_config_file_used(self, isolated_env, write_report, sample_report):
        (isolated_env / "reports").mkdir()
        (isolated_env / "reports" / "logins-a.txt").write_text(sample_report, encoding="utf-8")
        config_file = isolated_env / "symlogins.yaml"
        config_file.write_text("reports:\n  directory: reports\noutput:\n  csv: from-config.csv\n")

        assert main(["--config", str(config_file), "parse"]) == 0
        assert (isolated_env / "from-config.csv").exists()


class TestRunCommand:
    def test_collect_then_parse(self, isolated_env, sample_report):
        StaticSource.reports = {"000197901042": sample_report}

        with patch("symlogins.cli.main.SymcliReportSource", StaticSource):
            assert main(["run", "--output-dir", "reports", "--csv", "out.csv"]) == 0

        assert len(list((isolated_env / "reports").glob("logins-000197901042-*.txt"))) == 1
        with open(isolated_env / "out.csv", newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert rows[0]["array"] == "000197901042"
        assert rows[0]["sourceFile"].startswith("logins-000197901042-")

    def test_collect_command(self, isolated_env, sample_report, capsys):
        StaticSource.reports = {"000197901042": sample_report, "000197901043": sample_report}

        with patch("symlogins.cli.main.SymcliReportSource", StaticSource):
            assert main(["collect", "000197901043"]) == 0

        files = list(isolated_env.glob("logins-*.txt"))
        assert [f.name.split("-")[1] for f in files] == ["000197901043"]
        assert "Symaccess Login Reports: collected 1 of 1 arrays" in capsys.readouterr().err

    def test_missing_symcli_exits_zero(self, isolated_env, capsys):
        with patch("shutil.which", return_value=None):
            assert main(["run", "000197901042"]) == 0
        err = capsys.readouterr().err
        assert "Cannot locate symaccess" in err
        assert "nothing to parse" in err


class TestNoCommand:
    def test_help(self, capsys):
        assert main([]) == 0
        assert "symlogins" in capsys.readouterr().out
