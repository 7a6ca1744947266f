import json

import pytest

from py_servecalc.__main__ import get_arg_parser, main

pytestmark = pytest.mark.cli

BASE_ARGS = ['-s', '50', '-hf', '5', '-hi', '5']


def test_defaults():
    argv = get_arg_parser().parse_args(['-s', '90'])
    assert argv.target == 'wide'
    assert argv.side == 'deuce'
    assert argv.step_in == 0.5
    assert argv.clearance == 20
    assert not argv.json


def test_text_output(capsys):
    assert main(BASE_ARGS) == 0
    out = capsys.readouterr().out
    assert "elevation 4.2 °" in out
    assert "[unconstrained]" in out


def test_json_output(capsys):
    assert main(BASE_ARGS + ['--json', '-t', 't', '--side', 'ad', '-p', '10']) == 0
    record = json.loads(capsys.readouterr().out)
    assert record['azimuthRad'] < 0
    assert record['clampedToServiceLine'] is False
    assert len(record['trajectory']) == 10


def test_advisory_printed(capsys):
    assert main(['-s', '20', '-hf', '5', '-hi', '5', '-c', '100']) == 0
    out = capsys.readouterr().out
    assert "[clamped]" in out
    assert "requested clearance" in out


def test_invalid_target():
    with pytest.raises(SystemExit):
        main(BASE_ARGS + ['-t', 'body'])


def test_too_few_points():
    with pytest.raises(SystemExit):
        main(BASE_ARGS + ['--json', '-p', '1'])


def test_missing_config_file(tmp_path):
    assert main(BASE_ARGS + ['--config', str(tmp_path / 'missing.toml')]) == 1


def test_config_file(tmp_path, capsys):
    path = tmp_path / 'pyserve.toml'
    path.write_text("[pyserve.preferred_units]\nclearance = 'inch'\n")
    assert main(BASE_ARGS) == 0
    assert main(BASE_ARGS + ['--config', str(path)]) == 0
    text, config_text = capsys.readouterr().out.splitlines()[:2]
    assert " cm" in text
    assert " inch" in config_text


def test_misspelled_engine_key_in_config(tmp_path, caplog):
    path = tmp_path / 'pyserve.toml'
    path.write_text("[pyserve.engine]\ncPreferedDepthT = 5.0\n")
    assert main(BASE_ARGS + ['-t', 't', '--config', str(path)]) == 1
    assert "cPreferedDepthT" in caplog.text
    # the bad table is not kept as the default for later runs
    assert main(BASE_ARGS) == 0


def test_debug_flag(capsys, caplog):
    assert main(BASE_ARGS + ['-d']) == 0
    assert "Solver debug messages enabled" in caplog.text
    assert "find_bracket" in caplog.text
