"""
Tests for the command-line runner.
"""

import subprocess
import sys
from pathlib import Path

import polars as pl
import pytest
import yaml

from trajsim.core.base import SimulationConfig
from trajsim.run import build_config, build_parser, main, run


BASE = ['--type', 'ps', '--noises', '0.5,1', '-n', '3', '--freq', '0.5', '--end', '5']


def _table(argv):
    """Parse argv like the CLI and return the generated table."""
    config = build_config(build_parser().parse_args(argv))
    return run(config, verbose=False)


def test_cli_table():
    df = _table(BASE + ['--seed', '1'])
    assert isinstance(df, pl.DataFrame)
    assert df.height == 3 * 3 * 10
    assert df['noise'].unique().sort().to_list() == [0.0, 0.5, 1.0]


def test_main_returns_none():
    assert main(BASE + ['--seed', '1', '-q']) is None


def test_console_script_exit_status():
    # Installed entry points call sys.exit(main())
    with pytest.raises(SystemExit) as exc:
        sys.exit(main(BASE + ['--seed', '1', '-q']))
    assert exc.value.code is None


def test_module_exit_status():
    result = subprocess.run(
        [sys.executable, '-m', 'trajsim'] + BASE + ['--seed', '1', '-q'],
        cwd=Path(__file__).resolve().parents[1],
        capture_output=True,
        text=True,
    )
    assert result.returncode == 0
    assert 'shape:' not in result.stderr


def test_seed_is_reproducible():
    a = _table(BASE + ['--seed', '7'])
    b = _table(BASE + ['--seed', '7'])
    assert a.equals(b)


def test_extras_from_flags():
    df = _table(['--type', 'psd', '--damp', '1,0.1', '--noises', '0.5',
                 '-n', '2', '--end', '5', '--seed', '0'])
    assert df.height == 2 * 2 * 25

    df = _table(['--type', 'edls', '--interval-stim', '2', '--lambda', '0.5',
                 '--noises', '0.3', '-n', '2', '--end', '10', '--seed', '0'])
    assert df['value'].max() == 1.0


def test_verbose_output(capsys):
    main(BASE + ['--seed', '1'])
    out = capsys.readouterr().out
    assert 'TRAJSIM: ps x 3 noise levels' in out
    assert 'Table check PASSED' in out


def test_plot_written(tmp_path):
    target = tmp_path / 'ps.html'
    main(BASE + ['--seed', '1', '-q', '--plot', str(target)])
    assert target.exists()
    assert target.stat().st_size > 0


def test_manifest_with_overrides(tmp_path):
    (tmp_path / 'manifest.yaml').write_text(yaml.safe_dump({
        'type': 'pst',
        'noises': [0.5],
        'n': 2,
        'freq': 1.0,
        'end': 10,
        'seed': 3,
        'params': {'slope': 0.1},
    }))
    df = _table([str(tmp_path)])
    assert df.height == 2 * 2 * 10

    df = _table([str(tmp_path), '--noises', '0.5,1,2', '--slope', '0.3'])
    assert df.height == 4 * 2 * 10


def test_type_or_manifest_required():
    with pytest.raises(SystemExit):
        main(['-q'])


def test_bad_noises_rejected():
    with pytest.raises(SystemExit):
        main(['--type', 'ps', '--noises', 'a,b', '-q'])


def test_missing_extra_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main(['--type', 'nad', '-n', '2', '-q'])
    assert exc.value.code == 2
    assert 'damp_params' in capsys.readouterr().err


def test_bad_manifest_type_is_a_usage_error(tmp_path, capsys):
    (tmp_path / 'manifest.yaml').write_text(yaml.safe_dump({'type': 'sine'}))
    with pytest.raises(SystemExit) as exc:
        main([str(tmp_path), '-q'])
    assert exc.value.code == 2
    assert 'sine' in capsys.readouterr().err


def test_missing_manifest_is_a_usage_error(tmp_path):
    with pytest.raises(SystemExit):
        main([str(tmp_path / 'absent'), '-q'])


def test_run_programmatic():
    config = SimulationConfig(type='na', noises=[1.0], n=2, freq=1.0, end=5, seed=0)
    df = run(config, verbose=False)
    assert df.columns == ['Time', 'variable', 'value', 'noise']
