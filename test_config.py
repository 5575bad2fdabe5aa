"""
Tests for loading the default ParameterSet from the environment.
"""

import pytest

from srs_core import config, fsrs
from srs_core.fsrs.constants import DEFAULT_WEIGHTS


def test_empty_environment_gives_defaults():
    assert config.parameters_from_env({}) == fsrs.ParameterSet()


def test_values_are_parsed():
    params = config.parameters_from_env({
        "FSRS_REQUEST_RETENTION": "0.85",
        "FSRS_MAXIMUM_INTERVAL": "3650",
        "FSRS_ENABLE_FUZZ": "no",
        "FSRS_LEARNING_STEPS": "1, 5 15",
        "FSRS_RELEARNING_STEPS": "20",
        "FSRS_GRADUATING_INTERVAL": "2",
        "FSRS_EASY_INTERVAL": "6",
        "UNRELATED": "ignored",
    })
    assert params.request_retention == 0.85
    assert params.maximum_interval == 3650
    assert params.enable_fuzz is False
    assert params.learning_steps == (1.0, 5.0, 15.0)
    assert params.relearning_steps == (20.0,)
    assert params.graduating_interval == 2
    assert params.easy_interval == 6


def test_weights_are_parsed():
    raw = ",".join(str(w) for w in DEFAULT_WEIGHTS)
    params = config.parameters_from_env({"FSRS_WEIGHTS": raw})
    assert params.weights == DEFAULT_WEIGHTS


def test_empty_steps_mean_no_ladder():
    params = config.parameters_from_env({"FSRS_LEARNING_STEPS": "", "FSRS_WEIGHTS": " "})
    assert params.learning_steps == ()
    assert params.weights == DEFAULT_WEIGHTS


@pytest.mark.parametrize(
    "env",
    [
        {"FSRS_ENABLE_FUZZ": "maybe"},
        {"FSRS_LEARNING_STEPS": "1,x"},
        {"FSRS_REQUEST_RETENTION": "1.5"},
        {"FSRS_MAXIMUM_INTERVAL": "ten"},
        {"FSRS_WEIGHTS": "1 2 3"},
    ],
)
def test_bad_values_raise(env):
    with pytest.raises(fsrs.InvalidParameters):
        config.parameters_from_env(env)


def test_load_parameters_reads_process_environment(monkeypatch):
    monkeypatch.setenv("FSRS_REQUEST_RETENTION", "0.8")
    monkeypatch.setenv("FSRS_ENABLE_FUZZ", "off")
    params = config.load_parameters()
    assert params.request_retention == 0.8
    assert params.enable_fuzz is False


def test_load_parameters_with_mapping():
    params = config.load_parameters({"FSRS_EASY_INTERVAL": "7"})
    assert params.easy_interval == 7
