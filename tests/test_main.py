import textwrap

import pytest

from gridwalk.export.csv_writer import CSVWriter
from gridwalk.main import main
from gridwalk.model.engine import SimulationEngine


def write_config(tmp_path):
    path = tmp_path / "sim.yaml"
    path.write_text(textwrap.dedent("""
        map:
          text: |
            ^ #
            # $
        simulation:
          max_steps: 10
    """))
    return path


def test_main_runs_to_completion(tmp_path, capsys):
    out_dir = tmp_path / "out"
    code = main(['--config', str(write_config(tmp_path)), '--out-dir', str(out_dir),
                 '--no-snapshot', '--live'])
    assert code == 0
    assert (out_dir / 'simulation_log.csv').exists()
    printed = capsys.readouterr().out
    assert "#*$" in printed
    assert "GRIDWALK SIMULATION REPORT" in printed


def test_main_missing_config(tmp_path, capsys):
    assert main(['--config', str(tmp_path / 'nope.yaml'), '--quiet']) == 1
    assert "not found" in capsys.readouterr().err


def test_main_bad_map(tmp_path, capsys):
    path = tmp_path / "bad.yaml"
    path.write_text("map:\n  text: '^?$'\n")
    assert main(['--config', str(path), '--quiet', '--no-csv', '--no-snapshot']) == 1
    assert "Invalid map character" in capsys.readouterr().err


@pytest.mark.parametrize("extra", [
    "simulation:\n  strategy: 1\n",
    "agents:\n  count: many\n",
    "simulation:\n  max_steps: [10]\n",
])
def test_main_wrongly_typed_config(tmp_path, capsys, extra):
    path = tmp_path / "typed.yaml"
    path.write_text("map:\n  text: '^ $'\n" + extra)
    assert main(['--config', str(path), '--quiet', '--no-csv', '--no-snapshot']) == 1
    assert "Error loading config" in capsys.readouterr().err


def test_main_closes_csv_when_tick_fails(tmp_path, monkeypatch):
    closed = []
    original_close = CSVWriter.close

    def tracking_close(self):
        closed.append(self.output_path)
        original_close(self)

    def failing_advance(self):
        raise RuntimeError("tick failed")

    monkeypatch.setattr(CSVWriter, 'close', tracking_close)
    monkeypatch.setattr(SimulationEngine, 'advance', failing_advance)

    out_dir = tmp_path / "out"
    with pytest.raises(RuntimeError, match="tick failed"):
        main(['--config', str(write_config(tmp_path)), '--out-dir', str(out_dir),
              '--quiet', '--no-snapshot'])
    assert closed == [out_dir / 'simulation_log.csv']
