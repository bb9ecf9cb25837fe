"""Tests for the command line entry point with a fake lookup."""

import json

import pytest

import cairn.dictionary_lookup
import main_cli
from cairn.config import ENV_VARS
from cairn.dictionary_lookup import DictionaryEntry, LookupOutcome, Meaning, Sense
from cairn.etymology import ReconciledEtymology
from cairn.exceptions import WordNotFoundError
from cairn.history import WordHistory


def _outcome(requested, word, suggestion=None, diagnostic=None):
    entry = DictionaryEntry(
        word=word,
        meanings=[Meaning(part_of_speech="verb", senses=[Sense(definition="To soak up.")])],
    )
    etymology = ReconciledEtymology(text="From Latin absorbēre.", diagnostic=diagnostic)
    return LookupOutcome(
        requested=requested,
        word=word,
        entries=[entry],
        etymologies={word: etymology},
        suggestion=suggestion,
    )


def _fake_lookup(result, suggestion=None):
    class FakeLookup:
        calls = []

        def __init__(self, settings):
            self.settings = settings

        async def __aenter__(self):
            return self

        async def __aexit__(self, exc_type, exc_val, exc_tb):
            return False

        async def lookup(self, word, allow_suggest=True, on_suggestion=None):
            FakeLookup.calls.append((word, allow_suggest, self.settings.max_edit_distance))
            if suggestion and allow_suggest and on_suggestion:
                on_suggestion(suggestion)
            if isinstance(result, Exception):
                raise result
            return result

    return FakeLookup


@pytest.fixture
def cli_env(tmp_path, monkeypatch):
    for env_name in ENV_VARS:
        monkeypatch.delenv(env_name, raising=False)
    db_file = tmp_path / "history.db"
    monkeypatch.setenv("CAIRN_HISTORY_DB", str(db_file))
    return ["--config", str(tmp_path / "missing.json")], db_file


def test_prints_entry_and_saves_history(cli_env, monkeypatch, capsys):
    config_args, db_file = cli_env
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", _fake_lookup(_outcome("absorb", "absorb")))

    assert main_cli.main(["absorb", *config_args]) == 0

    out = capsys.readouterr().out
    assert "Did you mean" not in out
    assert "  Etymology:" in out
    assert "    From Latin absorbēre." in out
    assert "    1. To soak up." in out
    assert WordHistory(db_file).load_recent_words(10) == {"absorb"}


def test_reports_correction(cli_env, monkeypatch, capsys):
    config_args, _ = cli_env
    fake = _fake_lookup(_outcome("absord", "absorb", suggestion="absorb"), suggestion="absorb")
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", fake)

    assert main_cli.main(["absord", "--max-distance", "2", *config_args]) == 0

    out = capsys.readouterr().out
    assert out.startswith("Word not found. Did you mean: absorb?\n")
    assert fake.calls == [("absord", True, 2)]


def test_no_suggest_flag(cli_env, monkeypatch, capsys):
    config_args, _ = cli_env
    fake = _fake_lookup(_outcome("absorb", "absorb"))
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", fake)

    main_cli.main(["absorb", "--no-suggest", *config_args])

    assert fake.calls[0][1] is False


def test_diagnostic_goes_to_stderr(cli_env, monkeypatch, capsys):
    config_args, _ = cli_env
    outcome = _outcome("absorb", "absorb", diagnostic="Etymology unavailable: offline")
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", _fake_lookup(outcome))

    assert main_cli.main(["absorb", *config_args]) == 0

    captured = capsys.readouterr()
    assert "Etymology unavailable: offline" in captured.err
    assert "Etymology unavailable" not in captured.out


def test_lookup_error_exits_nonzero(cli_env, monkeypatch, capsys):
    config_args, db_file = cli_env
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", _fake_lookup(WordNotFoundError("qwxyz")))

    assert main_cli.main(["qwxyz", *config_args]) == 1

    assert 'Error: word not found: "qwxyz"' in capsys.readouterr().err
    assert WordHistory(db_file).load_recent_words(10) == set()


def test_invalid_max_distance(cli_env, capsys):
    config_args, _ = cli_env
    assert main_cli.main(["absorb", "--max-distance", "0", *config_args]) == 1
    assert "--max-distance" in capsys.readouterr().err


def test_invalid_configuration(cli_env, monkeypatch, capsys):
    config_args, _ = cli_env
    monkeypatch.setenv("CAIRN_RECENT_WORDS", "lots")

    assert main_cli.main(["absorb", *config_args]) == 1
    assert "invalid configuration" in capsys.readouterr().err


def test_correction_announced_before_failed_retry(cli_env, monkeypatch, capsys):
    """The tried suggestion is shown even when it has no entry either"""
    config_args, _ = cli_env
    fake = _fake_lookup(WordNotFoundError("absorb"), suggestion="absorb")
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", fake)

    assert main_cli.main(["absord", *config_args]) == 1

    captured = capsys.readouterr()
    assert captured.out.startswith("Word not found. Did you mean: absorb?\n")
    assert 'Error: word not found: "absorb"' in captured.err


def test_non_object_dict_section_does_not_crash(cli_env, monkeypatch, tmp_path, capsys):
    _, db_file = cli_env
    config_file = tmp_path / "config.json"
    config_file.write_text('{"dict": ["x"]}')
    monkeypatch.setattr(cairn.dictionary_lookup, "DictionaryLookup", _fake_lookup(_outcome("absorb", "absorb")))

    assert main_cli.main(["absorb", "--config", str(config_file)]) == 0
    assert WordHistory(db_file).load_recent_words(10) == {"absorb"}


def test_show_config(cli_env, monkeypatch, capsys):
    config_args, _ = cli_env
    monkeypatch.setenv("CAIRN_RECENT_WORDS", "2")

    assert main_cli.main(["--show-config", "--max-distance", "2", *config_args]) == 0

    info = json.loads(capsys.readouterr().out)
    assert info["settings"]["recent_words"] == 2
    assert info["settings"]["max_edit_distance"] == 2
    assert info["config_sources"] == {"env_variables": True, "config_file": False}


def test_word_required_without_show_config(cli_env):
    config_args, _ = cli_env
    with pytest.raises(SystemExit) as excinfo:
        main_cli.main(config_args)
    assert excinfo.value.code == 2
