from core.ndc import MAX_CANDIDATES, normalize_ndc


def test_unhyphenated_eleven_digits_adds_segmented_form():
    assert normalize_ndc("12345678901") == ["12345678901", "12345-6789-01"]


def test_unhyphenated_ten_digits_adds_segmented_form():
    assert normalize_ndc("0002322730") == ["0002322730", "00023-2273-0"]


def test_hyphenated_adds_digits_only_form():
    assert normalize_ndc("12345-6789-01") == ["12345-6789-01", "12345678901"]


def test_short_hyphenated_input_is_searched_as_is():
    # "0002-3227" has only 8 digits
    assert normalize_ndc("0002-3227") == ["0002-3227"]


def test_odd_length_digits_are_not_segmented():
    assert normalize_ndc("123456789") == ["123456789"]


def test_input_is_trimmed():
    assert normalize_ndc("  12345-6789-01 ") == ["12345-6789-01", "12345678901"]


def test_empty_and_blank_inputs():
    assert normalize_ndc("") == []
    assert normalize_ndc("   ") == []
    assert normalize_ndc(None) == []


def test_candidates_are_distinct_and_bounded():
    for raw in ("12345678901", "12345-6789-01", "abc", "0002-3227-30"):
        candidates = normalize_ndc(raw)
        assert len(candidates) == len(set(candidates))
        assert len(candidates) <= MAX_CANDIDATES
        assert candidates[0] == raw
