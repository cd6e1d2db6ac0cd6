import argparse
from pathlib import Path

import pytest

from config import load_config

ENVIRONMENT = {
    'JSON_RPC_URL': 'http://localhost:8545',
    'ROUTING_API_URL': 'http://router/',
}


def _namespace(**overrides):
    values = dict(
        dataset=['data/uni-aave-100.json'],
        output=None,
        chain_id=1,
        token_a_symbol='UNI',
        token_b_symbol='AAVE',
        token_a_decimals=18,
        token_b_decimals=18,
        max_concurrency=1,
        timeout=30.0,
        verbose=False,
    )
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def environment(monkeypatch):
    for key in ('JSON_RPC_URL', 'INFURA_KEY', 'ROUTING_API_URL', 'ROUTING_API_KEY'):
        monkeypatch.delenv(key, raising=False)
    for key, value in ENVIRONMENT.items():
        monkeypatch.setenv(key, value)
    return monkeypatch


def test_load_config_defaults(environment):
    environment.setattr('argparse.ArgumentParser.parse_args', lambda self: _namespace())

    config = load_config()

    assert config.datasets == ['data/uni-aave-100.json']
    assert config.rpc_url == 'http://localhost:8545'
    assert config.routing_api_url == 'http://router'
    assert config.routing_api_key is None
    assert config.max_concurrency == 1
    assert config.output_path_for('data/uni-aave-100.json') == Path('results/uni-aave-100-results.json')


def test_load_config_builds_infura_url(environment):
    environment.delenv('JSON_RPC_URL')
    environment.setenv('INFURA_KEY', 'abc123')
    environment.setattr('argparse.ArgumentParser.parse_args', lambda self: _namespace())

    config = load_config()

    assert config.rpc_url == 'https://mainnet.infura.io/v3/abc123'


def test_explicit_output_path(environment):
    environment.setattr('argparse.ArgumentParser.parse_args', lambda self: _namespace(output='out/custom.json'))

    config = load_config()

    assert config.output_path_for('data/bond-weth-100.json') == Path('out/custom.json')


def test_missing_rpc_credentials_exit(environment, capsys):
    environment.delenv('JSON_RPC_URL')
    environment.setattr('argparse.ArgumentParser.parse_args', lambda self: _namespace())

    with pytest.raises(SystemExit):
        load_config()

    assert 'INFURA_KEY' in capsys.readouterr().out


def test_missing_routing_api_exit(environment, capsys):
    environment.delenv('ROUTING_API_URL')
    environment.setattr('argparse.ArgumentParser.parse_args', lambda self: _namespace())

    with pytest.raises(SystemExit):
        load_config()

    assert 'ROUTING_API_URL' in capsys.readouterr().out


def test_output_requires_single_dataset(environment):
    environment.setattr(
        'argparse.ArgumentParser.parse_args',
        lambda self: _namespace(dataset=['a.json', 'b.json'], output='out.json'),
    )

    with pytest.raises(SystemExit):
        load_config()
