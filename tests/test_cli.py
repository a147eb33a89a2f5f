"""
Tests for CLI functionality.
"""

import json

import pytest

from pagefill.cli import create_parser, main


class TestCreateParser:
    """Test cases for argument parsing."""

    def test_generate_defaults(self):
        args = create_parser().parse_args(["generate", "sheet.xlsx", "cover.pdf"])

        assert args.command == "generate"
        assert args.output == "directory.pdf"
        assert args.leading_pages == 2
        assert args.closing_pages == 1
        assert args.rows_per_page is None

    def test_config_flags(self):
        args = create_parser().parse_args([
            "paginate", "sheet.xlsx", "--rows-per-page", "16", "--section-spacing-units", "0.5",
        ])

        assert args.rows_per_page == 16.0
        assert args.section_spacing_units == 0.5


class TestMain:
    """Test cases for CLI commands."""

    def test_version(self, capsys):
        assert main(["version"]) == 0

        assert "pagefill v" in capsys.readouterr().out

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0

        assert "usage" in capsys.readouterr().out

    def test_generate(self, make_workbook, make_pdf, pdf_page_widths, directory_rows, temp_dir, capsys):
        spreadsheet = make_workbook(directory_rows)
        attachment = temp_dir / "cover.pdf"
        attachment.write_bytes(make_pdf(3))
        output = temp_dir / "directory.pdf"

        code = main(["generate", str(spreadsheet), str(attachment), "-o", str(output), "--plain-logs"])

        assert code == 0
        assert pdf_page_widths(output.read_bytes()) == [500, 501, 1440, 1440, 502]
        assert "Saved" in capsys.readouterr().out

    def test_generate_with_policy_flags(self, make_workbook, make_pdf, pdf_page_widths, directory_rows, temp_dir):
        spreadsheet = make_workbook(directory_rows)
        attachment = temp_dir / "cover.pdf"
        attachment.write_bytes(make_pdf(3))
        output = temp_dir / "directory.pdf"

        code = main([
            "generate", str(spreadsheet), str(attachment), "-o", str(output),
            "--leading-pages", "1", "--closing-pages", "0", "--rows-per-page", "30", "--plain-logs",
        ])

        assert code == 0
        assert pdf_page_widths(output.read_bytes()) == [500, 1440]

    def test_generate_missing_attachment(self, make_workbook, directory_rows, temp_dir, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["generate", str(spreadsheet), str(temp_dir / "missing.pdf"), "--plain-logs"])

        assert code == 1
        assert "File not found" in capsys.readouterr().err

    def test_invalid_capacity(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["paginate", str(spreadsheet), "--rows-per-page", "0", "--plain-logs"])

        assert code == 1
        assert "ConfigurationError" in capsys.readouterr().err

    def test_paginate_json(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["paginate", str(spreadsheet), "--json", "--plain-logs"])

        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["page_count"] == 2
        assert data["config"]["rows_per_page"] == 14
        assert data["pages"][1]["blocks"][0]["kind"] == "continuation_note"

    def test_paginate_with_config_file(self, make_workbook, directory_rows, temp_dir, capsys):
        spreadsheet = make_workbook(directory_rows)
        config_path = temp_dir / "pagination.json"
        config_path.write_text(json.dumps({"rowsPerPage": 30}), encoding="utf-8")

        code = main(["paginate", str(spreadsheet), "--config", str(config_path), "--json", "--plain-logs"])

        assert code == 0
        assert json.loads(capsys.readouterr().out)["page_count"] == 1

    def test_paginate_summary(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["paginate", str(spreadsheet), "--plain-logs"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Pages: 2" in out
        assert "Page 2: 9 blocks" in out

    def test_html(self, make_workbook, directory_rows, temp_dir):
        spreadsheet = make_workbook(directory_rows)
        output = temp_dir / "directory.html"

        code = main(["html", str(spreadsheet), "-o", str(output), "--plain-logs"])

        assert code == 0
        assert output.read_text(encoding="utf-8").count('<section class="page"') == 2

    def test_html_default_output_path(self, make_workbook, directory_rows):
        spreadsheet = make_workbook(directory_rows, name="staff.xlsx")

        assert main(["html", str(spreadsheet), "--plain-logs"]) == 0

        assert spreadsheet.with_suffix(".html").exists()

    @pytest.mark.parametrize("use_rich_flag", [[], ["--verbose"]])
    def test_rich_logging(self, make_workbook, directory_rows, use_rich_flag):
        spreadsheet = make_workbook(directory_rows)

        assert main(["paginate", str(spreadsheet), "--json"] + use_rich_flag) == 0

    def test_non_finite_capacity(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["paginate", str(spreadsheet), "--rows-per-page", "nan", "--plain-logs"])

        assert code == 1
        assert "must be finite" in capsys.readouterr().err

    def test_verbose_error_prints_traceback(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        code = main(["paginate", str(spreadsheet), "--rows-per-page", "0", "--verbose", "--plain-logs"])

        err = capsys.readouterr().err
        assert code == 1
        assert "Error: ConfigurationError" in err
        assert "Traceback" in err

    def test_error_without_verbose_omits_traceback(self, make_workbook, directory_rows, capsys):
        spreadsheet = make_workbook(directory_rows)

        main(["paginate", str(spreadsheet), "--rows-per-page", "0", "--plain-logs"])

        assert "Traceback" not in capsys.readouterr().err
