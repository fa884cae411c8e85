"""Sentence splitting, tagging and term normalisation."""
import pytest

from dseek.preprocessing import (
    split_paragraphs, split_sentences, tag_sentences, merge_possessives,
    normalize_token, singularize, make_term, coarse_tag,
)


def test_paragraph_markers_and_entities():
    text = "<p>First one. Second one.</p><p>Third &amp; final.</p>"
    assert split_paragraphs(text) == ["First one. Second one.", "Third final."]


def test_blank_lines_split_paragraphs():
    assert split_paragraphs("One.\n\nTwo.\nThree.") == ["One.", "Two. Three."]


def test_split_sentences_keeps_order():
    assert split_sentences("A cat sat. Did it? Yes! ") == ["A cat sat.", "Did it?", "Yes!"]


def test_tag_sentences_flags_paragraph_starts(tagger):
    sentences = tag_sentences("<p>Graph theory grows. Sentence ranking grows.<p>Keyphrase extraction grows.",
                              pos_tagger=tagger)
    assert [s.idx for s in sentences] == [0, 1, 2]
    assert [s.starts_paragraph for s in sentences] == [True, False, True]
    assert sentences[2].text == "Keyphrase extraction grows."


def test_terms_are_normalised(tagger):
    [sentence] = tag_sentences("Local farmers' crops grow.", pos_tagger=tagger)
    normals = [t.normal for t in sentence.terms]
    assert normals == ["local", "farmer", "crops", "grow"]
    farmer = sentence.terms[1]
    assert farmer.is_noun
    assert {"NNS", "Noun", "Plural"} <= farmer.tags


def test_punctuation_is_dropped(tagger):
    [sentence] = tag_sentences("Graph, theory; rocks!", pos_tagger=tagger)
    assert [t.text for t in sentence.terms] == ["Graph", "theory", "rocks"]


def test_empty_text(tagger):
    assert tag_sentences("", pos_tagger=tagger) == []
    assert tag_sentences("  <p> </p> ", pos_tagger=tagger) == []


def test_merge_possessives():
    tagged = [("farmer", "NN"), ("'s", "POS"), ("crop", "NN")]
    assert merge_possessives(tagged) == [("farmer's", "NN"), ("crop", "NN")]
    assert merge_possessives([("farmers", "NNS"), ("'", "POS")]) == [("farmers'", "NNS")]
    # pronoun contractions stay apart
    assert merge_possessives([("it", "PRP"), ("'s", "POS")]) == [("it", "PRP"), ("'s", "POS")]


@pytest.mark.parametrize("word,expected", [
    ("stories", "story"), ("boxes", "box"), ("classes", "class"), ("farmers", "farmer"),
    ("virus", "virus"), ("glass", "glass"), ("analysis", "analysis"), ("gas", "gas"),
])
def test_singularize(word, expected):
    assert singularize(word) == expected


def test_normalize_token():
    assert normalize_token("Farmer's", "NN") == "farmer"
    assert normalize_token("farmers'", "NNS") == "farmer"
    assert normalize_token("Impacts", "VBZ") == "impacts"


def test_make_term_tags():
    assert make_term("runs", "VBZ").tags == frozenset({"VBZ", "Verb"})
    assert coarse_tag("JJ") == "Adjective"
    assert coarse_tag("DT") == "Other"


def test_nltk_tagger_marks_nouns():
    nltk = pytest.importorskip("nltk")
    try:
        nltk.data.find("taggers/averaged_perceptron_tagger_eng/")
    except LookupError:
        pytest.skip("NLTK perceptron tagger data not installed")
    [sentence] = tag_sentences("The farmers measured the climate change impacts.")
    nouns = {t.normal for t in sentence.terms if t.is_noun}
    assert {"farmer", "climate"} <= nouns


def test_comparison_signs_are_not_markup(tagger):
    text = "Prices rose when x < 5 and climate change risk > 3 here."
    assert split_paragraphs(text) == [text]
    [sentence] = tag_sentences(text, pos_tagger=tagger)
    assert sentence.text == text
    assert "climate" in [t.normal for t in sentence.terms]


def test_tags_are_still_removed():
    assert split_paragraphs("A <b>bold</b> claim.<br/>Next <p>New one.") == [
        "A bold claim. Next", "New one.",
    ]
