"""Phrase model loading and lookups."""
import json
import pytest

from dseek.datatypes import PhraseModelEntry
from dseek.phrase_model import PhraseModel, PhraseModelError, load_default_model


def test_from_dict_keeps_stored_order(model):
    entries = model.candidates("climate")
    assert entries == (
        PhraseModelEntry(continuation="change", specificity=6.0),
        PhraseModelEntry(continuation="change mitigation", specificity=9.0),
        PhraseModelEntry(continuation=None, specificity=4.0),
    )


def test_missing_word_and_prefix(model):
    assert model.candidates("cloud") == ()
    assert model.candidates("zebra") == ()
    assert "climate" in model
    assert "zebra" not in model
    assert len(model) == 8


def test_model_is_read_only(model):
    with pytest.raises(TypeError):
        model._table["xx"] = {}
    with pytest.raises(TypeError):
        model._table["cl"]["climate"] = ()


def test_continuations_are_normalised():
    model = PhraseModel.from_dict({"re": {"red": [{"n": "  Wine ", "u": 3}]}})
    assert model.candidates("red")[0].continuation == "wine"
    assert model.candidates("red")[0].specificity == 3.0


@pytest.mark.parametrize("data", [
    [],
    {"cl": []},
    {"cl": {"climate": {"n": "change"}}},
    {"cl": {"climate": ["change"]}},
    {"cl": {"climate": [{"n": 5}]}},
    {"cl": {"climate": [{"u": "high"}]}},
    {"cl": {"climate": [{"u": -1}]}},
    {"cl": {"climate": [{"u": True}]}},
])
def test_invalid_shapes_raise(data):
    with pytest.raises(PhraseModelError):
        PhraseModel.from_dict(data)


def test_from_string_rejects_bad_json_and_nan():
    with pytest.raises(PhraseModelError):
        PhraseModel.from_string("{not json")
    with pytest.raises(PhraseModelError):
        PhraseModel.from_string('{"cl": {"climate": [{"u": NaN}]}}')


def test_from_json_file(tmp_path):
    path = tmp_path / "model.json"
    path.write_text(json.dumps({"gr": {"graph": [{"n": "theory", "u": 8.4}]}}), encoding="utf-8")
    model = PhraseModel.from_json(path)
    assert model.candidates("graph")[0].continuation == "theory"


def test_default_model_is_loaded_once():
    first = load_default_model()
    assert first is load_default_model()
    assert "climate" in first


def test_empty_model():
    assert len(PhraseModel.empty()) == 0


def test_non_utf8_model_file(tmp_path):
    path = tmp_path / "model.json"
    path.write_bytes(b'{"cl": {"\xff": []}}')
    with pytest.raises(PhraseModelError):
        PhraseModel.from_json(path)
