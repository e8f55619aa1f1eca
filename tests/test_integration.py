"""
Integration tests for the command-line interface.

Runs the CLI functions end to end on a temporary invoices directory.
"""

import json
import logging
import sys

import pytest
import main
from energy_invoice_extractor.config.settings import set_settings

INVOICE_TEXT = """Energie Steiermark
Erika Musterfrau
Bahnhofstraße 3
8010 Graz
Zählpunkt: AT0040000502000000000000010127094
Stromverbrauch aktuell 1.850,0 kWh
Stromverbrauch Vorperiode 1.920,0 kWh
"""


@pytest.fixture
def invoices_dir(tmp_path):
    directory = tmp_path / "invoices"
    directory.mkdir()
    (directory / "graz.txt").write_text(INVOICE_TEXT, encoding='utf-8')
    return directory


class TestCommandLine:
    """Test the CLI entry points."""

    def teardown_method(self):
        """Reset global settings and the handlers installed by main()."""
        set_settings(None)
        root = logging.getLogger()
        for handler in root.handlers[:]:
            if type(handler) in (logging.StreamHandler, logging.FileHandler):
                root.removeHandler(handler)

    def test_print_single_file(self, invoices_dir, capsys):
        """Test that --print writes the JSON record to stdout."""
        assert main.process_single_file(str(invoices_dir / "graz.txt"), print_json=True)

        output = json.loads(capsys.readouterr().out)
        assert output['address'] == "Erika Musterfrau, Bahnhofstraße 3, 8010 Graz"
        assert output['meter_point_id'] == "AT0040000502000000000000010127094"
        assert output['current_consumption_kwh'] == "1850.0"

    def test_save_single_file(self, invoices_dir, tmp_path):
        """Test saving one record."""
        output_dir = tmp_path / "output"

        assert main.process_single_file(str(invoices_dir / "graz.txt"), str(output_dir))
        assert (output_dir / "graz.json").exists()

    def test_missing_single_file(self, tmp_path):
        """Test that a missing file reports failure."""
        assert not main.process_single_file(str(tmp_path / "missing.txt"), str(tmp_path))

    def test_batch(self, invoices_dir, tmp_path, capsys):
        """Test batch processing with summary output."""
        output_dir = tmp_path / "output"

        main.process_all_invoices(str(invoices_dir), str(output_dir))

        assert "Processing Summary" in capsys.readouterr().out
        assert (output_dir / "all_invoices.json").exists()
        assert (output_dir / "all_invoices.csv").exists()

    def test_batch_missing_directory_exits(self, tmp_path):
        """Test exit status 1 for a missing invoices directory."""
        with pytest.raises(SystemExit) as exc_info:
            main.process_all_invoices(str(tmp_path / "missing"), str(tmp_path / "output"))

        assert exc_info.value.code == 1

    def test_parser_defaults(self, monkeypatch):
        """Test that directory defaults come from settings."""
        monkeypatch.setenv('INVOICES_DIR', 'rechnungen')
        set_settings(None)

        args = main.build_parser().parse_args([])

        assert args.invoices_dir == 'rechnungen'
        assert args.file is None
        assert not args.print_json

    def test_main_single_file(self, invoices_dir, tmp_path, monkeypatch):
        """Test the main entry point exit status."""
        output_dir = tmp_path / "output"
        monkeypatch.setattr(sys, 'argv', [
            'energy-invoice-extractor', '--file', str(invoices_dir / "graz.txt"),
            '--output-dir', str(output_dir)
        ])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 0
        assert (output_dir / "graz.json").exists()

    def test_main_rejects_invalid_configuration(self, invoices_dir, tmp_path, monkeypatch, capsys):
        """Test that an unknown selection policy stops the run with exit status 1."""
        output_dir = tmp_path / "output"
        monkeypatch.setenv("AKTUELL_SELECTION", "last")
        set_settings(None)
        monkeypatch.setattr(sys, 'argv', [
            'energy-invoice-extractor', '--file', str(invoices_dir / "graz.txt"),
            '--output-dir', str(output_dir)
        ])

        with pytest.raises(SystemExit) as exc_info:
            main.main()

        assert exc_info.value.code == 1
        assert "AKTUELL_SELECTION" in capsys.readouterr().err
        assert not output_dir.exists()
