import pytest
from doctools.casing import (
    case_edits,
    change_case,
    to_initial_caps,
    to_lower,
    to_sentence_case,
    to_title_case,
    to_upper,
    tokenize_title,
    transform_selection,
)
from doctools.models import TextRun


# --- lower / upper ---

@pytest.mark.parametrize("text", ["", "Hello World", "MiXeD 123 _x_", "straße", "İstanbul", "ﬁne print"])
def test_upper_preserves_length(text):
    assert len(to_upper(text)) == len(text)


@pytest.mark.parametrize("text", ["", "Hello World", "straße", "ǆ digraph"])
def test_upper_is_idempotent(text):
    assert to_upper(to_upper(text)) == to_upper(text)


def test_lower_preserves_length_for_dotted_capital_i():
    # 'İ'.lower() is two code points — left unchanged instead
    assert to_lower("İSTANBUL") == "İstanbul"


def test_upper_keeps_sharp_s():
    assert to_upper("straße") == "STRAßE"


def test_lower_then_upper_round_trip():
    assert to_upper(to_lower("HelloWorld")) == "HELLOWORLD"


# --- initial caps ---

def test_initial_caps_uses_word_boundaries():
    assert to_initial_caps("hello-world foo") == "Hello-World Foo"


def test_initial_caps_leaves_interior_letters_alone():
    assert to_initial_caps("mcDONALD's iPhone") == "McDONALD'S IPhone"


def test_initial_caps_empty():
    assert to_initial_caps("") == ""


# --- sentence case ---

def test_sentence_case():
    assert to_sentence_case("HELLO WORLD") == "Hello world"


def test_sentence_case_only_capitalizes_first_character():
    assert to_sentence_case("one. TWO. three") == "One. two. three"


def test_sentence_case_leading_space_stays_lowercase():
    assert to_sentence_case(" HELLO") == " hello"


def test_sentence_case_empty():
    assert to_sentence_case("") == ""


# --- title case ---

def test_title_case_stop_words():
    assert to_title_case("the lord of the rings") == "The Lord of the Rings"


def test_title_case_capitalizes_after_colon():
    assert to_title_case("war and peace: a novel") == "War and Peace: A Novel"


def test_title_case_last_word_always_capitalized():
    assert to_title_case("what are you looking at") == "What Are You Looking At"


def test_title_case_lowercases_shouted_stop_words():
    assert to_title_case("GONE WITH THE WIND") == "Gone with the Wind"


def test_title_case_keeps_punctuation_around_words():
    assert to_title_case('"the end of the road," he said') == '"The End of the Road," He Said'


def test_title_case_dash_does_not_force_capital():
    assert to_title_case("life - a short manual") == "Life - a Short Manual"


def test_title_case_em_dash_is_a_separator():
    assert to_title_case("rise—and fall") == "Rise—and Fall"


def test_title_case_leading_whitespace_keeps_first_stop_word_lowercase():
    # the split leaves an empty fragment before leading whitespace, so "of" is not the first word
    assert to_title_case("  of mice and men") == "  of Mice and Men"


def test_title_case_trailing_colon_hides_last_word():
    assert to_title_case("what are you looking at:") == "What Are You Looking at:"


def test_title_case_first_word_without_leading_whitespace():
    assert to_title_case("of mice and men") == "Of Mice and Men"


def test_title_case_leaves_contractions_untouched():
    # "don't" can't be split into one core word, so it passes through as-is
    assert to_title_case("i don't know") == "I don't Know"


def test_title_case_colon_state_survives_punctuation_only_tokens():
    assert to_title_case("part one: ... a beginning") == "Part One: ... A Beginning"


def test_title_case_preserves_length():
    text = "the  quick—brown: fox of the   hills"
    assert len(to_title_case(text)) == len(text)


@pytest.mark.parametrize("text", ["", "   ", "- : —", "..."])
def test_title_case_without_words_is_unchanged(text):
    assert to_title_case(text) == text


def test_tokenize_title_tags_tokens():
    tokens = tokenize_title("war: (a) novel")
    assert [t.kind for t in tokens] == ["word", "colon", "other", "whitespace", "word", "whitespace", "word"]
    word = tokens[4]
    assert (word.leading, word.core, word.trailing) == ("(", "a", ")")
    assert [t.index for t in tokens] == list(range(7))


def test_tokenize_title_keeps_empty_fragments():
    tokens = tokenize_title(": -")
    assert [t.text for t in tokens] == ["", ":", "", " ", "", "-", ""]
    assert [t.kind for t in tokens if not t.text] == ["other"] * 4


# --- dispatch / selection / edits ---

def test_change_case_dispatches_by_name():
    assert change_case("hello there", "title") == "Hello There"


def test_change_case_accepts_text_run():
    assert change_case(TextRun(content="Hello"), "upper") == TextRun(content="HELLO")


def test_change_case_unknown_style_raises():
    with pytest.raises(ValueError):
        change_case("x", "shouty")


def test_transform_selection_only_touches_range():
    assert transform_selection("hello big world", "upper", 6, 9) == "hello BIG world"


def test_transform_selection_clamps_bounds():
    assert transform_selection("abc", "upper", -5, 99) == "ABC"


def test_case_edits_lists_changed_positions():
    assert case_edits("abc", "aBc") == [(1, "B")]


def test_case_edits_rejects_length_change():
    with pytest.raises(ValueError):
        case_edits("abc", "abcd")
